"""Priority-ordered, fault-isolated publish/dispatch of named events.

:class:`HookBus` knows nothing about the registry or the store; it only
maps event names to callbacks. Dispatch is synchronous and fire-and-forget:
return values are discarded and a callback that raises never stops the
callbacks after it.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from gqlide.hooks.events import HookEvent

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

HookCallback = Callable[..., Any]
EventName = Union[str, HookEvent]


def _event_key(event_name: EventName) -> str:
    if isinstance(event_name, HookEvent):
        return event_name.value
    return event_name


@dataclass(frozen=True)
class HookListener:
    """One subscription. ``sequence`` breaks ties between equal priorities."""

    event_name: str
    callback: HookCallback = field(compare=False)
    priority: int = DEFAULT_PRIORITY
    sequence: int = 0


class HookBus:
    """Dispatches named events to subscribed callbacks.

    Callbacks run in ascending ``priority`` order; callbacks with the same
    priority run in the order they subscribed. When a callback raises, the
    error is logged and re-dispatched as :attr:`HookEvent.HOOK_ERROR` with
    ``(event_name, args, error)`` so that extensions can observe failures
    of their siblings.

    Example::

        bus = HookBus()
        bus.subscribe("before_render", lambda ctx: print(ctx.version))
        bus.dispatch("before_render", boot_context)
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[HookListener]] = {}
        self._counter = itertools.count()

    def subscribe(
        self,
        event_name: EventName,
        callback: HookCallback,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Subscribe *callback* to *event_name*.

        Args:
            event_name: Event to listen for.
            callback: Called with the dispatch arguments, unchanged.
            priority: Lower numbers run first. Defaults to ``10``.
        """
        key = _event_key(event_name)
        listener = HookListener(
            event_name=key,
            callback=callback,
            priority=priority,
            sequence=next(self._counter),
        )
        self._listeners.setdefault(key, []).append(listener)

    def unsubscribe(self, event_name: EventName, callback: HookCallback) -> int:
        """Remove every subscription of *callback* to *event_name*.

        Returns:
            The number of subscriptions removed.
        """
        key = _event_key(event_name)
        current = self._listeners.get(key, [])
        kept = [listener for listener in current if listener.callback != callback]
        self._listeners[key] = kept
        return len(current) - len(kept)

    def listeners(self, event_name: EventName) -> list[HookListener]:
        """Return the subscriptions for *event_name* in delivery order."""
        current = self._listeners.get(_event_key(event_name), [])
        return sorted(current, key=lambda listener: (listener.priority, listener.sequence))

    def has_listeners(self, event_name: EventName) -> bool:
        return bool(self._listeners.get(_event_key(event_name)))

    def dispatch(self, event_name: EventName, *args: Any) -> None:
        """Invoke every callback subscribed to *event_name* with *args*.

        The delivery order is computed once, before the first callback runs,
        so subscriptions made during dispatch take effect on the next one.
        """
        key = _event_key(event_name)
        for listener in self.listeners(key):
            try:
                listener.callback(*args)
            except Exception as exc:
                logger.error(
                    "Hook listener %r for '%s' failed: %s",
                    listener.callback,
                    key,
                    exc,
                    exc_info=True,
                )
                self._report_failure(key, args, exc)

    def _report_failure(self, event_name: str, args: tuple[Any, ...], error: Exception) -> None:
        """Re-dispatch a listener failure as :attr:`HookEvent.HOOK_ERROR`.

        Failures of ``hook_error`` listeners themselves are only logged.
        """
        if event_name == HookEvent.HOOK_ERROR.value:
            return
        for listener in self.listeners(HookEvent.HOOK_ERROR):
            try:
                listener.callback(event_name, args, error)
            except Exception as exc:
                logger.error("Hook error listener %r failed: %s", listener.callback, exc)

    def clear(self, event_name: EventName | None = None) -> None:
        """Drop the subscriptions of *event_name*, or of every event when ``None``."""
        if event_name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(_event_key(event_name), None)
