"""Bot server -- app factory and entry point."""

from __future__ import annotations

import logging

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger
from botbuilder.core import BotFrameworkAdapter, BotFrameworkAdapterSettings, TurnContext
from botbuilder.schema import Activity, ActivityTypes

from .. import __version__
from ..config.settings import cfg
from ..messaging.bot import Bot
from ..messaging.commands import CommandRouter
from ..podcast.actions import (
    FollowAction,
    FollowingContextBuilder,
    FollowRssAction,
    HelpContextBuilder,
    SearchContextBuilder,
    UnfollowAction,
    UnfollowContextBuilder,
)
from ..podcast.contexts import FeedLoader
from ..podcast.directory import PodcastDirectory
from ..state.follow_store import FollowStore, get_follow_store
from .bot_endpoint import BotEndpoint

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/health"})

ERROR_TEXT = "Something went wrong. Check your input and the podcast data."


# ---------------------------------------------------------------------------
# Access logger
# ---------------------------------------------------------------------------


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes health-probe log entries to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            response.status,
            time,
        )


# ---------------------------------------------------------------------------
# Bot Framework adapter
# ---------------------------------------------------------------------------


def create_adapter() -> BotFrameworkAdapter:
    settings = BotFrameworkAdapterSettings(
        app_id=cfg.bot_app_id or None,
        app_password=cfg.bot_app_password or None,
        channel_auth_tenant=cfg.bot_app_tenant_id or None,
    )
    adapter = BotFrameworkAdapter(settings)
    adapter.on_turn_error = on_turn_error
    return adapter


async def on_turn_error(context: TurnContext, error: Exception) -> None:
    logger.error("Bot turn error: %s", error, exc_info=error)
    try:
        await context.send_activity(Activity(type=ActivityTypes.message, text=ERROR_TEXT))
    except Exception:
        logger.warning("Could not deliver the error message", exc_info=True)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def build_router(
    store: FollowStore,
    directory: PodcastDirectory,
    feed_loader: FeedLoader | None = None,
) -> CommandRouter:
    return CommandRouter(
        follow_action=FollowAction(directory, store),
        follow_rss_action=FollowRssAction(store, feed_loader),
        following_context=FollowingContextBuilder(store),
        help_context=HelpContextBuilder(),
        search_context=SearchContextBuilder(directory),
        unfollow_action=UnfollowAction(store),
        unfollow_context=UnfollowContextBuilder(store),
    )


class AppFactory:
    """Builds the aiohttp application with all dependencies wired."""

    def __init__(
        self,
        *,
        directory: PodcastDirectory | None = None,
        feed_loader: FeedLoader | None = None,
        adapter: BotFrameworkAdapter | None = None,
    ) -> None:
        self._directory = directory or PodcastDirectory()
        self._feed_loader = feed_loader
        self._adapter = adapter

    def build(self) -> web.Application:
        adapter = self._adapter or create_adapter()
        router = build_router(get_follow_store(), self._directory, self._feed_loader)
        bot = Bot(router)

        app = web.Application()
        app["bot"] = bot
        BotEndpoint(adapter, bot).register(app.router)
        app.router.add_get("/health", _health)
        logger.info(
            "castbot v%s ready (bot configured=%s, feed loader=%s)",
            __version__, cfg.bot_configured, self._feed_loader is not None,
        )
        return app


def create_app(feed_loader: FeedLoader | None = None) -> web.Application:
    return AppFactory(feed_loader=feed_loader).build()


async def _health(_req: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


def main() -> None:
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    port = cfg.bot_port
    logger.info("Starting bot server on port %d ...", port)
    if not cfg.bot_configured:
        logger.warning("BOT_APP_ID / BOT_APP_PASSWORD not set; /api/messages will answer 503")
    web.run_app(create_app(), host="0.0.0.0", port=port, access_log_class=QuietAccessLogger)


if __name__ == "__main__":
    main()
