"""Command router.

Maps a command name to its business collaborator and message builder,
then delivers the resulting messages: the first one fulfils the deferred
reply, the rest follow as separate messages in order.
"""

from __future__ import annotations

import logging

from ..podcast.contexts import (
    FollowingContextSource,
    HelpContextSource,
    PodcastAction,
    SearchContextSource,
    UnfollowContextSource,
)
from .display import DisplayUnit
from .interaction import CommandEvent
from .message_lists import (
    build_follow_messages,
    build_following_messages,
    build_help_messages,
    build_search_messages,
    build_unfollow_messages,
)

logger = logging.getLogger(__name__)


class CommandRouter:
    _COMMANDS: dict[str, str] = {
        "follow": "_cmd_follow",
        "follow-rss": "_cmd_follow_rss",
        "following": "_cmd_following",
        "search": "_cmd_search",
        "unfollow": "_cmd_unfollow",
        "help": "_cmd_help",
    }
    _DEFAULT_COMMAND = "_cmd_help"

    def __init__(
        self,
        *,
        follow_action: PodcastAction,
        follow_rss_action: PodcastAction,
        following_context: FollowingContextSource,
        help_context: HelpContextSource,
        search_context: SearchContextSource,
        unfollow_action: PodcastAction,
        unfollow_context: UnfollowContextSource,
    ) -> None:
        self._follow_action = follow_action
        self._follow_rss_action = follow_rss_action
        self._following_context = following_context
        self._help_context = help_context
        self._search_context = search_context
        self._unfollow_action = unfollow_action
        self._unfollow_context = unfollow_context

    @classmethod
    def handler_for(cls, name: str) -> str:
        """Name of the handler method for *name*; unknown names get help."""
        return cls._COMMANDS.get(name, cls._DEFAULT_COMMAND)

    async def process(self, event: CommandEvent) -> bool:
        """Handle one command invocation.

        Returns ``True`` once the event has been handled, including when
        there was nothing to send.  Errors raised by the collaborators
        propagate to the caller.
        """
        reply = event.defer_reply()

        handler_name = self.handler_for(event.name)
        logger.info("Command %r -> %s (channel=%s)", event.name, handler_name, event.channel_id)
        messages: list[DisplayUnit] = await getattr(self, handler_name)(event)

        if not messages:
            logger.warning("Nothing returned in the message list for command %r", event.name)
            return True

        reply.fulfill(messages[0])
        for message in messages[1:]:
            event.send_followup(message)
        return True

    async def _cmd_follow(self, event: CommandEvent) -> list[DisplayUnit]:
        return build_follow_messages(await self._follow_action.run(event))

    async def _cmd_follow_rss(self, event: CommandEvent) -> list[DisplayUnit]:
        return build_follow_messages(await self._follow_rss_action.run(event))

    async def _cmd_following(self, event: CommandEvent) -> list[DisplayUnit]:
        return build_following_messages(await self._following_context.build(event))

    async def _cmd_search(self, event: CommandEvent) -> list[DisplayUnit]:
        return build_search_messages(await self._search_context.build(event))

    async def _cmd_unfollow(self, event: CommandEvent) -> list[DisplayUnit]:
        podcast = await self._unfollow_action.run(event)
        return build_unfollow_messages(await self._unfollow_context.build(event, podcast))

    async def _cmd_help(self, event: CommandEvent) -> list[DisplayUnit]:
        return build_help_messages(await self._help_context.build(event))
