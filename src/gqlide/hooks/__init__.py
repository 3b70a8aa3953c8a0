"""Lifecycle hooks for gqlide.

* :class:`HookBus` -- subscribe callbacks to named events and dispatch them
  in priority order with per-listener fault isolation.
* :class:`HookEvent` -- the event names the core emits.

Example::

    from gqlide.hooks import HookBus, HookEvent

    bus = HookBus()
    bus.subscribe(HookEvent.HOOK_ERROR, lambda name, args, err: print(name, err))
"""

from gqlide.hooks.bus import DEFAULT_PRIORITY, HookBus, HookListener
from gqlide.hooks.events import HookEvent, after_register_event, register_error_event

__all__ = [
    "DEFAULT_PRIORITY",
    "HookBus",
    "HookEvent",
    "HookListener",
    "after_register_event",
    "register_error_event",
]
