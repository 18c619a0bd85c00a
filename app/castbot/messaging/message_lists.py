"""Turn command results into the ordered list of messages to send.

Every builder may return an empty list, which callers treat as "nothing
to report" rather than an error.
"""

from __future__ import annotations

from ..podcast.contexts import FollowedPodcast, FollowingContext, HelpContext, SearchContext, UnfollowContext
from ..podcast.models import Podcast
from .display import DESCRIPTION_LIMIT, Author, DisplayUnit
from .episode import build_episode_unit
from .formatting import html_to_markdown

FOLLOWING_TITLE = "Podcasts followed in this channel"
NOT_FOLLOWING_TEXT = "This channel is not following any podcasts. Use /follow or /follow-rss to add one."


def build_follow_messages(podcast: Podcast | None) -> list[DisplayUnit]:
    """Confirmation for a new follow plus the most recent episode, if known."""
    if podcast is None:
        return []

    messages = [
        DisplayUnit(
            title=f"Now following {podcast.title}",
            url=podcast.show_url,
            description=html_to_markdown(podcast.description, DESCRIPTION_LIMIT),
            image_url=podcast.image_url,
            author=Author(name=podcast.author),
            footer=podcast.feed_url,
        )
    ]
    if podcast.episodes:
        messages.append(build_episode_unit(podcast, 0))
    return messages


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _following_line(followed: FollowedPodcast) -> str:
    podcast = followed.podcast
    title = f"[{podcast.title}]({podcast.show_url})" if podcast.show_url else podcast.title
    return f"`{followed.feed_id}` {title}"


def build_following_messages(context: FollowingContext) -> list[DisplayUnit]:
    if not context.followed:
        return [DisplayUnit(title=FOLLOWING_TITLE, description=NOT_FOLLOWING_TEXT)]

    pages: list[list[str]] = [[]]
    size = 0
    for line in map(_following_line, context.followed):
        added = len(line) + (1 if pages[-1] else 0)
        if pages[-1] and size + added > DESCRIPTION_LIMIT:
            pages.append([])
            size, added = 0, len(line)
        pages[-1].append(line)
        size += added

    count = _plural(len(context.followed), "podcast")
    return [
        DisplayUnit(
            title=FOLLOWING_TITLE,
            description="\n".join(lines),
            footer=count if len(pages) == 1 else f"{count} | page {n}/{len(pages)}",
        )
        for n, lines in enumerate(pages, 1)
    ]


def build_search_messages(context: SearchContext) -> list[DisplayUnit]:
    return [
        DisplayUnit(
            title=podcast.title,
            url=podcast.show_url,
            description=html_to_markdown(podcast.description, DESCRIPTION_LIMIT),
            image_url=podcast.image_url,
            author=Author(name=podcast.author),
            footer=podcast.feed_url,
        )
        for podcast in context.podcasts
    ]


def build_unfollow_messages(context: UnfollowContext) -> list[DisplayUnit]:
    podcast = context.podcast
    if podcast is None:
        return []
    remaining = len(context.remaining)
    return [
        DisplayUnit(
            title=f"Unfollowed {podcast.title}",
            url=podcast.show_url,
            image_url=podcast.image_url,
            footer=f"This channel now follows {_plural(remaining, 'podcast')}",
        )
    ]


def build_help_messages(context: HelpContext) -> list[DisplayUnit]:
    lines = [f"`{c.usage}` - {c.summary}" for c in context.commands]
    return [
        DisplayUnit(
            title="Podcast bot help",
            description="\n".join(lines),
            footer=f"castbot v{context.version}",
        )
    ]
