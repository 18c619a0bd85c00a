"""Podcast directory search backed by the iTunes Search API."""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config.settings import cfg
from ..util.async_helpers import run_sync
from .models import Podcast

logger = logging.getLogger(__name__)


class DirectoryResult(BaseModel):
    """One entry of the ``results`` array returned by the directory."""

    model_config = ConfigDict(extra="ignore")

    # The directory sends null for fields it has no value for.
    collection_name: str | None = Field(default=None, alias="collectionName")
    collection_view_url: str | None = Field(default=None, alias="collectionViewUrl")
    artist_name: str | None = Field(default=None, alias="artistName")
    artwork_url_600: str | None = Field(default=None, alias="artworkUrl600")
    artwork_url_100: str | None = Field(default=None, alias="artworkUrl100")
    feed_url: str | None = Field(default=None, alias="feedUrl")

    @property
    def has_feed(self) -> bool:
        return (self.feed_url or "").startswith(("http://", "https://"))

    def to_podcast(self) -> Podcast:
        return Podcast(
            title=self.collection_name or "",
            show_url=self.collection_view_url or "",
            image_url=self.artwork_url_600 or self.artwork_url_100 or "",
            feed_url=self.feed_url or "",
            author=self.artist_name or "",
        )


class PodcastDirectory:
    """Looks podcasts up by title keywords.

    Entries without an http(s) feed URL are dropped since nothing can be
    followed without a feed.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session or requests.Session()

    async def search(self, keywords: str, limit: int) -> list[Podcast]:
        if not keywords.strip():
            return []
        payload = await run_sync(self._fetch, keywords.strip(), limit)
        return self._parse(payload)

    def _fetch(self, keywords: str, limit: int) -> dict[str, Any]:
        params = {
            "term": keywords,
            "country": cfg.directory_country,
            "media": "podcast",
            "attribute": "titleTerm",
            "limit": limit,
        }
        resp = self._session.get(cfg.directory_url, params=params, timeout=cfg.http_timeout)
        resp.raise_for_status()
        return resp.json()

    @staticmethod
    def _parse(payload: dict[str, Any]) -> list[Podcast]:
        podcasts: list[Podcast] = []
        for raw in payload.get("results", []):
            try:
                result = DirectoryResult.model_validate(raw)
            except ValidationError as exc:
                logger.warning("Skipping malformed directory result: %s", exc)
                continue
            if not result.has_feed:
                logger.debug("Skipping %r: no usable feed URL", result.collection_name)
                continue
            podcasts.append(result.to_podcast())
        return podcasts
