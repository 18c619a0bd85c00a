"""Shared pytest fixtures for app.castbot tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.castbot.config import settings as _settings  # noqa: F401  (registers its singleton)
from app.castbot.messaging.display import DisplayUnit
from app.castbot.podcast.models import Episode, Podcast
from app.castbot.state import follow_store as _follow_store  # noqa: F401  (registers its singleton)

_ENV_KEYS = (
    "BOT_APP_ID",
    "BOT_APP_PASSWORD",
    "BOT_APP_TENANT_ID",
    "BOT_PORT",
    "LOG_LEVEL",
    "DIRECTORY_URL",
    "DIRECTORY_COUNTRY",
    "SEARCH_LIMIT",
    "HTTP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DOTENV_PATH", str(tmp_path / ".env"))
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from app.castbot.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def env_dir(_isolate_env: Path) -> Path:
    return _isolate_env


class FakeReply:
    def __init__(self, event: FakeEvent) -> None:
        self._event = event

    def fulfill(self, unit: DisplayUnit) -> None:
        self._event.calls.append(("reply", unit))


class FakeEvent:
    """In-memory CommandEvent that records every send in order."""

    def __init__(self, name: str, options: dict[str, str] | None = None, channel_id: str = "chan-1") -> None:
        self.name = name
        self.options = options or {}
        self.channel_id = channel_id
        self.calls: list[tuple[str, DisplayUnit | None]] = []

    def defer_reply(self) -> FakeReply:
        self.calls.append(("defer", None))
        return FakeReply(self)

    def send_followup(self, unit: DisplayUnit) -> None:
        self.calls.append(("followup", unit))

    @property
    def sent(self) -> list[tuple[str, DisplayUnit | None]]:
        return [c for c in self.calls if c[0] != "defer"]


@pytest.fixture()
def make_event():
    return FakeEvent


@pytest.fixture()
def episode() -> Episode:
    return Episode(
        title="Episode 7: Tides",
        link="https://example.com/ep7",
        description="<p>The <b>first</b> line.</p><p>Second line.</p>",
        image_url="https://example.com/ep7.jpg",
        duration="1:00:00",
        season_id="3",
        episode_id="7",
        explicit="true",
    )


@pytest.fixture()
def podcast(episode: Episode) -> Podcast:
    return Podcast(
        title="Ocean Talk",
        show_url="https://example.com/show",
        image_url="https://example.com/show.jpg",
        episodes=(episode, Episode(title="Episode 6", duration="125")),
        description="All about <i>the sea</i>.",
        feed_url="https://example.com/feed.xml",
        author="Sea Folk",
    )
