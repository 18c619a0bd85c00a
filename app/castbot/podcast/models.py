"""Read-only podcast and episode views handed to the message builders."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Episode:
    title: str = ""
    link: str = ""
    description: str = ""
    image_url: str = ""
    # Either "HH:MM:SS" or a raw count of seconds.
    duration: str = ""
    season_id: str | None = None
    episode_id: str | None = None
    explicit: str = ""


@dataclass(frozen=True, slots=True)
class Podcast:
    """A podcast and its episodes in feed order (index 0 is the newest)."""

    title: str = ""
    show_url: str = ""
    image_url: str = ""
    episodes: tuple[Episode, ...] = field(default_factory=tuple)
    description: str = ""
    feed_url: str = ""
    author: str = ""
