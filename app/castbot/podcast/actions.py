"""Default follow/unfollow actions and context builders."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from .. import __version__
from ..config.settings import cfg
from ..state.follow_store import FollowStore
from .contexts import (
    CommandHelp,
    FeedLoader,
    FollowingContext,
    HelpContext,
    SearchContext,
    UnfollowContext,
    option,
)
from .directory import PodcastDirectory
from .models import Podcast

if TYPE_CHECKING:
    from ..messaging.interaction import CommandEvent

logger = logging.getLogger(__name__)

COMMAND_HELP: tuple[CommandHelp, ...] = (
    CommandHelp("/follow <keywords>", "Follow the podcast whose title best matches the keywords."),
    CommandHelp("/follow-rss <feed url>", "Follow a podcast by its RSS feed URL."),
    CommandHelp("/following", "List the podcasts followed in this channel."),
    CommandHelp("/search <keywords>", "Search the podcast directory."),
    CommandHelp("/unfollow <id>", "Stop following a podcast (ids are shown by /following)."),
    CommandHelp("/help", "Show this message."),
)


class FollowAction:
    """Follows the single best directory match for the ``keywords`` option."""

    def __init__(self, directory: PodcastDirectory, store: FollowStore) -> None:
        self._directory = directory
        self._store = store

    async def run(self, event: CommandEvent) -> Podcast | None:
        keywords = option(event, "keywords")
        podcasts = await self._directory.search(keywords, 1)
        if len(podcasts) != 1:
            logger.info("No directory match for %r", keywords)
            return None
        self._store.add(event.channel_id, podcasts[0])
        return podcasts[0]


class FollowRssAction:
    """Follows the feed given in the ``feed`` option via a :class:`FeedLoader`."""

    def __init__(self, store: FollowStore, loader: FeedLoader | None = None) -> None:
        self._store = store
        self._loader = loader

    async def run(self, event: CommandEvent) -> Podcast | None:
        feed_url = option(event, "feed")
        if not feed_url.startswith(("http://", "https://")):
            logger.info("Rejected feed URL %r", feed_url)
            return None
        if self._loader is None:
            logger.warning("follow-rss requested but no feed loader is configured")
            return None
        podcast = await self._loader.load(feed_url)
        if podcast is None:
            return None
        if not podcast.feed_url:
            podcast = replace(podcast, feed_url=feed_url)
        self._store.add(event.channel_id, podcast)
        return podcast


class UnfollowAction:
    def __init__(self, store: FollowStore) -> None:
        self._store = store

    async def run(self, event: CommandEvent) -> Podcast | None:
        return self._store.remove(event.channel_id, option(event, "id"))


class FollowingContextBuilder:
    def __init__(self, store: FollowStore) -> None:
        self._store = store

    async def build(self, event: CommandEvent) -> FollowingContext:
        followed = self._store.list_channel(event.channel_id)
        return FollowingContext(channel_id=event.channel_id, followed=tuple(followed))


class SearchContextBuilder:
    def __init__(self, directory: PodcastDirectory) -> None:
        self._directory = directory

    async def build(self, event: CommandEvent) -> SearchContext:
        keywords = option(event, "keywords")
        podcasts = await self._directory.search(keywords, cfg.search_limit)
        return SearchContext(query=keywords, podcasts=tuple(podcasts))


class UnfollowContextBuilder:
    def __init__(self, store: FollowStore) -> None:
        self._store = store

    async def build(self, event: CommandEvent, podcast: Podcast | None) -> UnfollowContext:
        remaining = self._store.list_channel(event.channel_id)
        return UnfollowContext(podcast=podcast, remaining=tuple(remaining))


class HelpContextBuilder:
    async def build(self, event: CommandEvent) -> HelpContext:
        return HelpContext(version=__version__, commands=COMMAND_HELP)
