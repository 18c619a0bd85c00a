"""In-memory registry of which podcasts each channel follows.

Follows live only as long as the process. Thread-safe via internal lock.
"""

from __future__ import annotations

import hashlib
import logging
import threading

from ..podcast.contexts import FollowedPodcast
from ..podcast.models import Podcast
from ..util.singletons import register_singleton

logger = logging.getLogger(__name__)


def feed_id_for(feed_url: str) -> str:
    """Stable short id users type to unfollow a feed."""
    return hashlib.sha1(feed_url.strip().encode("utf-8")).hexdigest()[:8]


class FollowStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._feeds: dict[str, Podcast] = {}
        self._channels: dict[str, list[str]] = {}

    def add(self, channel_id: str, podcast: Podcast) -> str:
        feed_id = feed_id_for(podcast.feed_url or podcast.show_url)
        with self._lock:
            self._feeds[feed_id] = podcast
            followed = self._channels.setdefault(channel_id, [])
            if feed_id not in followed:
                followed.append(feed_id)
        logger.info("Channel %s follows %s (%s)", channel_id, podcast.title, feed_id)
        return feed_id

    def remove(self, channel_id: str, feed_id: str) -> Podcast | None:
        with self._lock:
            followed = self._channels.get(channel_id, [])
            if feed_id not in followed:
                return None
            followed.remove(feed_id)
            podcast = self._feeds[feed_id]
            if not any(feed_id in ids for ids in self._channels.values()):
                del self._feeds[feed_id]
        logger.info("Channel %s unfollowed %s (%s)", channel_id, podcast.title, feed_id)
        return podcast

    def get(self, feed_id: str) -> Podcast | None:
        with self._lock:
            return self._feeds.get(feed_id)

    def list_channel(self, channel_id: str) -> list[FollowedPodcast]:
        with self._lock:
            return [
                FollowedPodcast(feed_id=fid, podcast=self._feeds[fid])
                for fid in self._channels.get(channel_id, [])
            ]


_store: FollowStore | None = None


def get_follow_store() -> FollowStore:
    global _store
    if _store is None:
        _store = FollowStore()
    return _store


def _reset_store() -> None:
    global _store
    _store = None


register_singleton("follow_store", _reset_store)
