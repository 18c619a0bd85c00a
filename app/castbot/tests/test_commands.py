"""Tests for the CommandRouter."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.castbot.messaging.commands import CommandRouter
from app.castbot.messaging.display import DisplayUnit
from app.castbot.podcast.actions import COMMAND_HELP
from app.castbot.podcast.contexts import (
    FollowedPodcast,
    FollowingContext,
    HelpContext,
    SearchContext,
    UnfollowContext,
)
from app.castbot.podcast.models import Podcast


@pytest.fixture()
def collaborators(podcast: Podcast) -> dict[str, MagicMock]:
    follow = MagicMock()
    follow.run = AsyncMock(return_value=podcast)
    follow_rss = MagicMock()
    follow_rss.run = AsyncMock(return_value=None)
    following = MagicMock()
    following.build = AsyncMock(return_value=FollowingContext(
        channel_id="chan-1",
        followed=(FollowedPodcast(feed_id="abcd1234", podcast=podcast),),
    ))
    help_ctx = MagicMock()
    help_ctx.build = AsyncMock(return_value=HelpContext(version="1.0.0", commands=COMMAND_HELP))
    search = MagicMock()
    search.build = AsyncMock(return_value=SearchContext(
        query="sea",
        podcasts=tuple(Podcast(title=f"Result {i}") for i in range(3)),
    ))
    unfollow = MagicMock()
    unfollow.run = AsyncMock(return_value=podcast)
    unfollow_ctx = MagicMock()
    unfollow_ctx.build = AsyncMock(side_effect=lambda event, p: UnfollowContext(podcast=p))
    return {
        "follow_action": follow,
        "follow_rss_action": follow_rss,
        "following_context": following,
        "help_context": help_ctx,
        "search_context": search,
        "unfollow_action": unfollow,
        "unfollow_context": unfollow_ctx,
    }


@pytest.fixture()
def router(collaborators: dict[str, MagicMock]) -> CommandRouter:
    return CommandRouter(**collaborators)


class TestDispatch:
    @pytest.mark.parametrize(
        ("name", "handler"),
        [
            ("follow", "_cmd_follow"),
            ("follow-rss", "_cmd_follow_rss"),
            ("following", "_cmd_following"),
            ("search", "_cmd_search"),
            ("unfollow", "_cmd_unfollow"),
            ("help", "_cmd_help"),
            ("dance", "_cmd_help"),
            ("", "_cmd_help"),
        ],
    )
    def test_handler_for(self, name: str, handler: str) -> None:
        assert CommandRouter.handler_for(name) == handler

    @pytest.mark.asyncio
    async def test_unknown_command_matches_help(self, router: CommandRouter, make_event) -> None:
        unknown = make_event("dance")
        explicit = make_event("help")
        assert await router.process(unknown) is True
        assert await router.process(explicit) is True
        assert unknown.calls == explicit.calls
        assert unknown.sent[0][1].title == "Podcast bot help"

    @pytest.mark.asyncio
    async def test_unknown_command_is_deterministic(self, router: CommandRouter, make_event) -> None:
        first, second = make_event("nope"), make_event("nope")
        await router.process(first)
        await router.process(second)
        assert first.calls == second.calls

    @pytest.mark.asyncio
    async def test_follow_uses_follow_action(self, router, collaborators, make_event) -> None:
        event = make_event("follow", {"keywords": "ocean"})
        await router.process(event)
        collaborators["follow_action"].run.assert_awaited_once_with(event)
        collaborators["follow_rss_action"].run.assert_not_awaited()
        assert event.sent[0][1].title == "Now following Ocean Talk"

    @pytest.mark.asyncio
    async def test_unfollow_passes_podcast_to_context(self, router, collaborators, podcast, make_event) -> None:
        event = make_event("unfollow", {"id": "abcd1234"})
        await router.process(event)
        collaborators["unfollow_context"].build.assert_awaited_once_with(event, podcast)
        assert [kind for kind, _ in event.sent] == ["reply"]
        assert event.sent[0][1].title == "Unfollowed Ocean Talk"

    @pytest.mark.asyncio
    async def test_following(self, router, make_event) -> None:
        event = make_event("following")
        await router.process(event)
        assert "abcd1234" in event.sent[0][1].description


class TestDelivery:
    @pytest.mark.asyncio
    async def test_defers_before_anything_else(self, router, make_event) -> None:
        event = make_event("search", {"keywords": "sea"})
        await router.process(event)
        assert event.calls[0] == ("defer", None)

    @pytest.mark.asyncio
    async def test_first_is_reply_rest_follow_in_order(self, router, make_event) -> None:
        event = make_event("search", {"keywords": "sea"})
        assert await router.process(event) is True
        assert [kind for kind, _ in event.sent] == ["reply", "followup", "followup"]
        assert [unit.title for _, unit in event.sent] == ["Result 0", "Result 1", "Result 2"]

    @pytest.mark.asyncio
    async def test_follow_sends_episode_as_followup(self, router, podcast, make_event) -> None:
        event = make_event("follow", {"keywords": "ocean"})
        await router.process(event)
        kinds = [kind for kind, _ in event.sent]
        assert kinds == ["reply", "followup"]
        assert event.sent[1][1].title == podcast.episodes[0].title

    @pytest.mark.asyncio
    async def test_empty_result_is_silent_success(self, router, make_event, caplog) -> None:
        event = make_event("follow-rss", {"feed": "https://bad.test/rss"})
        with caplog.at_level(logging.WARNING, logger="app.castbot.messaging.commands"):
            assert await router.process(event) is True
        assert event.sent == []
        assert event.calls == [("defer", None)]
        assert any("Nothing returned" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_empty_search_sends_nothing(self, router, collaborators, make_event) -> None:
        collaborators["search_context"].build.return_value = SearchContext(query="zzz")
        event = make_event("search", {"keywords": "zzz"})
        assert await router.process(event) is True
        assert event.sent == []

    @pytest.mark.asyncio
    async def test_collaborator_errors_propagate(self, router, collaborators, make_event) -> None:
        collaborators["search_context"].build.side_effect = ConnectionError("directory down")
        event = make_event("search", {"keywords": "sea"})
        with pytest.raises(ConnectionError):
            await router.process(event)
        assert event.sent == []

    @pytest.mark.asyncio
    async def test_concurrent_invocations_are_isolated(self, router, make_event) -> None:
        events = [make_event("search", {"keywords": "sea"}, channel_id=f"c{i}") for i in range(5)]
        results = await asyncio.gather(*(router.process(e) for e in events))
        assert results == [True] * 5
        for event in events:
            assert len(event.sent) == 3
            assert all(isinstance(unit, DisplayUnit) for _, unit in event.sent)
