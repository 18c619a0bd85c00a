"""Display unit for a single podcast episode."""

from __future__ import annotations

from ..podcast.models import Episode, Podcast
from .display import DESCRIPTION_LIMIT, Author, DisplayUnit, join_footer
from .duration import format_duration
from .formatting import html_to_markdown

EXPLICIT_NOTICE = "Parental Advisory - Explicit Content"


def build_episode_unit(podcast: Podcast, index: int) -> DisplayUnit:
    """Build the message for ``podcast.episodes[index]``.

    Raises:
        IndexError: if *index* is outside ``[0, len(podcast.episodes))``.
        DurationParseError: if the episode duration is malformed.
    """
    if not 0 <= index < len(podcast.episodes):
        raise IndexError(
            f"Episode index {index} out of range for {podcast.title!r} "
            f"({len(podcast.episodes)} episodes)"
        )
    episode = podcast.episodes[index]

    return DisplayUnit(
        title=episode.title,
        url=episode.link,
        description=_description_text(episode),
        image_url=episode.image_url,
        author=Author(name=podcast.title, url=podcast.show_url, icon_url=podcast.image_url),
        footer=_footer_text(episode),
    )


def _description_text(episode: Episode) -> str:
    # Clip to the limit first, then keep only the first line of what is left.
    markdown = html_to_markdown(episode.description, DESCRIPTION_LIMIT)
    first_line, _, _ = markdown.partition("\n")
    return first_line


def _episode_label(episode: Episode) -> str:
    season = _is_valid(episode.season_id)
    number = _is_valid(episode.episode_id)
    label = f"S{episode.season_id}" if season else ""
    label += ":" if season and number else ""
    label += f"E{episode.episode_id}" if number else ""
    return label


def _footer_text(episode: Episode) -> str:
    return join_footer([
        _episode_label(episode),
        format_duration(episode.duration),
        EXPLICIT_NOTICE if episode.explicit == "true" else None,
    ])


def _is_valid(value: str | None) -> bool:
    return value is not None and bool(value.strip())
