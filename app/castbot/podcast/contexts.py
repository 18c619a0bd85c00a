"""Command results and the collaborator contracts that produce them.

Actions perform a side effect (follow, unfollow) and return the affected
podcast, or ``None`` when nothing happened.  Context builders gather the
data a message list needs without changing anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .models import Podcast

if TYPE_CHECKING:
    from ..messaging.interaction import CommandEvent


@dataclass(frozen=True, slots=True)
class FollowedPodcast:
    feed_id: str
    podcast: Podcast


@dataclass(frozen=True, slots=True)
class FollowingContext:
    channel_id: str
    followed: tuple[FollowedPodcast, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchContext:
    query: str
    podcasts: tuple[Podcast, ...] = ()


@dataclass(frozen=True, slots=True)
class UnfollowContext:
    podcast: Podcast | None
    remaining: tuple[FollowedPodcast, ...] = ()


@dataclass(frozen=True, slots=True)
class CommandHelp:
    usage: str
    summary: str


@dataclass(frozen=True, slots=True)
class HelpContext:
    version: str
    commands: tuple[CommandHelp, ...] = field(default_factory=tuple)


class PodcastAction(Protocol):
    async def run(self, event: CommandEvent) -> Podcast | None: ...


class FollowingContextSource(Protocol):
    async def build(self, event: CommandEvent) -> FollowingContext: ...


class SearchContextSource(Protocol):
    async def build(self, event: CommandEvent) -> SearchContext: ...


class UnfollowContextSource(Protocol):
    async def build(self, event: CommandEvent, podcast: Podcast | None) -> UnfollowContext: ...


class HelpContextSource(Protocol):
    async def build(self, event: CommandEvent) -> HelpContext: ...


class FeedLoader(Protocol):
    """Fetches and parses an RSS feed into a :class:`Podcast`."""

    async def load(self, feed_url: str) -> Podcast | None: ...


def option(event: CommandEvent, name: str) -> str:
    options: Mapping[str, str] = event.options or {}
    return (options.get(name) or "").strip()
