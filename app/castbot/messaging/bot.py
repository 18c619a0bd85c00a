"""Bot Framework ActivityHandler -- turns chat messages into router commands."""

from __future__ import annotations

import logging
import re

from botbuilder.core import ActivityHandler, TurnContext
from botbuilder.schema import Activity, ActivityTypes, ChannelAccount

from .commands import CommandRouter
from .interaction import TurnInteraction

logger = logging.getLogger(__name__)

# command name -> option that receives the text after the command
PRIMARY_OPTIONS: dict[str, str] = {
    "follow": "keywords",
    "follow-rss": "feed",
    "search": "keywords",
    "unfollow": "id",
}

_MENTION_RE = re.compile(r"<at>.*?</at>", re.IGNORECASE | re.DOTALL)


def parse_command(text: str) -> tuple[str, dict[str, str]] | None:
    """Split ``/name arguments`` into a command name and its options.

    Returns ``None`` for text that is not a command.  A ``@botname`` suffix
    on the command (Telegram groups) is ignored.
    """
    text = _MENTION_RE.sub("", text or "").strip()
    if not text.startswith("/"):
        return None
    parts = text[1:].split(maxsplit=1)
    if not parts:
        return "", {}
    name = parts[0].split("@", 1)[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ""
    option = PRIMARY_OPTIONS.get(name)
    return name, ({option: args} if option and args else {})


class Bot(ActivityHandler):
    def __init__(self, router: CommandRouter) -> None:
        self._router = router

    async def on_message_activity(self, turn_context: TurnContext) -> None:
        parsed = parse_command(turn_context.activity.text or "")
        if parsed is None:
            logger.debug("Ignoring non-command message in %s", turn_context.activity.channel_id)
            return

        name, options = parsed
        interaction = TurnInteraction(turn_context, name, options)
        try:
            await self._router.process(interaction)
        finally:
            await interaction.drain()

    async def on_members_added_activity(
        self,
        members_added: list[ChannelAccount],
        turn_context: TurnContext,
    ) -> None:
        for member in members_added:
            if member.id != turn_context.activity.recipient.id:
                await turn_context.send_activity(
                    Activity(
                        type=ActivityTypes.message,
                        text="Hello! I keep this channel up to date with podcasts. Send /help to get started.",
                    )
                )
