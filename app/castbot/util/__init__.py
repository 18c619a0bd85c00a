"""Shared utilities."""

from .async_helpers import fire_and_forget, run_sync
from .singletons import register_singleton, reset_all_singletons

__all__ = [
    "fire_and_forget",
    "register_singleton",
    "reset_all_singletons",
    "run_sync",
]
