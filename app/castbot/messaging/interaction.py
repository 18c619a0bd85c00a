"""Command invocations and their reply capabilities.

A :class:`CommandEvent` is what the router consumes: a command name,
its options, and two ways to answer.  ``defer_reply()`` acknowledges the
command immediately and hands back a :class:`DeferredReply` that is later
fulfilled with the real content; ``send_followup()`` posts additional
messages to the same conversation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from botbuilder.core import TurnContext
from botbuilder.schema import Activity, ActivityTypes

from ..util.async_helpers import fire_and_forget
from .cards import build_attachment
from .display import DisplayUnit

logger = logging.getLogger(__name__)


class DeferredReply(Protocol):
    def fulfill(self, unit: DisplayUnit) -> None: ...


class CommandEvent(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def options(self) -> Mapping[str, str]: ...

    @property
    def channel_id(self) -> str: ...

    def defer_reply(self) -> DeferredReply: ...

    def send_followup(self, unit: DisplayUnit) -> None: ...


class _TurnReply:
    """Single-use reply handle; *send* delivers the unit."""

    def __init__(self, send: Callable[[DisplayUnit], None]) -> None:
        self._send = send
        self._fulfilled = False

    def fulfill(self, unit: DisplayUnit) -> None:
        if self._fulfilled:
            raise RuntimeError("Deferred reply already fulfilled")
        self._fulfilled = True
        self._send(unit)


class TurnInteraction:
    """Bot Framework turn exposed as a :class:`CommandEvent`.

    The deferred acknowledgement is a typing indicator.  Every send is
    scheduled without being awaited; :meth:`drain` waits for the ones still
    in flight so the turn is not closed under them.
    """

    def __init__(self, turn_context: TurnContext, name: str, options: Mapping[str, str] | None = None) -> None:
        self._turn_context = turn_context
        self._name = name
        self._options = dict(options or {})
        self._pending: list[asyncio.Task[Any]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> Mapping[str, str]:
        return self._options

    @property
    def channel_id(self) -> str:
        conversation = self._turn_context.activity.conversation
        return conversation.id if conversation and conversation.id else ""

    @property
    def platform(self) -> str:
        return (self._turn_context.activity.channel_id or "").lower()

    def defer_reply(self) -> DeferredReply:
        self._submit(Activity(type=ActivityTypes.typing), "ack")
        return _TurnReply(self._send_reply)

    def _send_reply(self, unit: DisplayUnit) -> None:
        self._submit(self._message(unit), "reply")

    def send_followup(self, unit: DisplayUnit) -> None:
        self._submit(self._message(unit), "followup")

    async def drain(self) -> None:
        pending, self._pending = self._pending, []
        if pending:
            # Failures were already logged by the background done callback.
            await asyncio.wait(pending)

    def _message(self, unit: DisplayUnit) -> Activity:
        return Activity(
            type=ActivityTypes.message,
            attachments=[build_attachment(unit, self.platform)],
            summary=unit.title or None,
        )

    def _submit(self, activity: Activity, kind: str) -> None:
        task = fire_and_forget(
            self._turn_context.send_activity(activity),
            name=f"{self._name}:{kind}:{len(self._pending)}",
        )
        self._pending.append(task)
