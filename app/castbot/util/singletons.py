"""Registry of module-level singletons so tests can rebuild them.

Each singleton owner registers a reset callable under a unique name;
registering the same name twice replaces the earlier callable.
"""

from __future__ import annotations

from collections.abc import Callable

_reset_fns: dict[str, Callable[[], None]] = {}


def register_singleton(name: str, reset_fn: Callable[[], None]) -> None:
    _reset_fns[name] = reset_fn


def reset_all_singletons() -> None:
    """Rebuild every registered singleton in registration order."""
    for fn in list(_reset_fns.values()):
        fn()
