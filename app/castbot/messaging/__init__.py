"""Channel messaging pipeline -- bot handler, command router, message builders, and cards."""

from .bot import Bot
from .commands import CommandRouter
from .display import Author, DisplayUnit
from .duration import DurationParseError, format_duration
from .episode import build_episode_unit
from .interaction import CommandEvent, DeferredReply, TurnInteraction

__all__ = [
    "Author",
    "Bot",
    "CommandEvent",
    "CommandRouter",
    "DeferredReply",
    "DisplayUnit",
    "DurationParseError",
    "TurnInteraction",
    "build_episode_unit",
    "format_duration",
]
