"""Bot Framework endpoint -- POST /api/messages."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from aiohttp import web
from botbuilder.schema import Activity

from ..config.settings import cfg

if TYPE_CHECKING:
    from botbuilder.core import BotFrameworkAdapter

    from ..messaging.bot import Bot

logger = logging.getLogger(__name__)


class BotEndpoint:
    """Handles incoming Bot Framework activities."""

    def __init__(self, adapter: BotFrameworkAdapter, bot: Bot) -> None:
        self.adapter = adapter
        self._bot = bot

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post("/api/messages", self.handle)
        router.add_get("/api/messages", self._get_messages)

    async def _get_messages(self, _req: web.Request) -> web.Response:
        """GET /api/messages -- simple health probe for the bot endpoint."""
        return web.json_response({
            "status": "ok",
            "endpoint": "/api/messages",
            "method": "POST required",
            "bot_configured": cfg.bot_configured,
        })

    async def handle(self, req: web.Request) -> web.Response:
        logger.debug(
            "[bot] POST /api/messages from %s | content-length=%s",
            req.remote,
            req.headers.get("Content-Length", "?"),
        )

        if not cfg.bot_configured:
            logger.warning(
                "[bot] Rejected: bot credentials not configured (app_id=%s, password=%s)",
                bool(cfg.bot_app_id), bool(cfg.bot_app_password),
            )
            return web.json_response(
                {"status": "error", "message": "Bot credentials not configured"},
                status=503,
            )

        raw_body = await req.read()
        try:
            body = json.loads(raw_body)
        except ValueError as exc:
            logger.error("[bot] Failed to parse JSON body: %s | raw=%s", exc, raw_body[:200])
            return web.json_response(
                {"status": "error", "message": f"Invalid JSON: {exc}"},
                status=400,
            )
        if not isinstance(body, dict):
            return web.json_response(
                {"status": "error", "message": "Activity must be a JSON object"},
                status=400,
            )

        activity_type = body.get("type", "?")
        channel = body.get("channelId", "?")
        auth_header = req.headers.get("Authorization", "")
        logger.info("[bot] Activity: type=%s channel=%s", activity_type, channel)

        try:
            activity = Activity().deserialize(body)
            response = await self.adapter.process_activity(activity, auth_header, self._bot.on_turn)
        except PermissionError as exc:
            logger.warning("[bot] Authentication failed (401): %s", exc)
            return web.Response(status=401, text=str(exc))
        except Exception as exc:
            logger.exception(
                "[bot] Error processing activity: %s (type=%s channel=%s)",
                exc, activity_type, channel,
            )
            return web.json_response(
                {"status": "error", "message": f"Processing failed: {exc}"},
                status=500,
            )

        if response:
            if response.body is None or isinstance(response.body, (bytes, str)):
                return web.Response(
                    status=response.status,
                    body=response.body,
                    content_type="application/json",
                )
            return web.json_response(response.body, status=response.status)
        return web.Response(status=200)
