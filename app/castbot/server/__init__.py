"""Server module -- aiohttp application factory and the Bot Framework endpoint."""

from __future__ import annotations

from .app import AppFactory, build_router, create_adapter, create_app, main

__all__ = ["AppFactory", "build_router", "create_adapter", "create_app", "main"]
