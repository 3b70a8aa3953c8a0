"""Ordered collection of named, prioritised extension contributions.

The :class:`ExtensionRegistry` stores toolbar buttons and activity panels
keyed by ``(kind, name)``. Registering an existing key overwrites it in
place; reads always return a freshly sorted view (ascending priority, then
first-registration order).

Registration is usually called from third-party initialisation code, so
:meth:`ExtensionRegistry.register` never raises: failures are logged and
delivered as ``<kind>_register_error`` hook events.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Union

from pydantic import BaseModel

from gqlide.exceptions import RegistrationError
from gqlide.hooks.bus import DEFAULT_PRIORITY, HookBus
from gqlide.hooks.events import after_register_event
from gqlide.models import CONFIG_MODELS, ExtensionEntry, ExtensionKind

logger = logging.getLogger(__name__)

KindLike = Union[ExtensionKind, str]


def _resolve_kind(kind: KindLike) -> Optional[ExtensionKind]:
    try:
        return ExtensionKind(kind)
    except ValueError:
        return None


class ExtensionRegistry:
    """Registry of UI contributions with deterministic ordering.

    Args:
        hooks: Bus on which registration success and failure events are
            dispatched. A private bus is created when omitted.

    Example::

        registry = ExtensionRegistry(hooks)
        registry.register("toolbar_button", "prettify", {"label": "Prettify"}, 5)
        registry.get_sorted(ExtensionKind.TOOLBAR_BUTTON)
    """

    def __init__(self, hooks: Optional[HookBus] = None) -> None:
        self._hooks = hooks if hooks is not None else HookBus()
        self._entries: dict[tuple[ExtensionKind, str], ExtensionEntry] = {}
        self._counter = itertools.count()

    @property
    def hooks(self) -> HookBus:
        return self._hooks

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def register(
        self,
        kind: KindLike,
        name: str,
        config: Any,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register or overwrite the contribution *name* of *kind*.

        On success ``after_register_<kind>`` is dispatched with
        ``(name, config, priority)``. On failure ``<kind>_register_error``
        is dispatched with ``(name, config, priority, error)``.

        Args:
            kind: An :class:`~gqlide.models.ExtensionKind` or its value.
            name: Unique key within *kind*.
            config: A mapping or a model instance matching *kind*'s model.
            priority: Lower numbers sort first. Defaults to ``10``.
        """
        kind_value = kind.value if isinstance(kind, ExtensionKind) else str(kind)
        try:
            resolved = ExtensionKind(kind_value)
            entry = self._write(resolved, name, config, priority)
        except Exception as exc:
            logger.error("Failed to register %s '%s': %s", kind_value, name, exc)
            self._hooks.dispatch(
                f"{kind_value}_register_error", name, config, priority, exc
            )
            return

        logger.debug("Registered %s '%s' (priority %d)", kind_value, name, priority)
        self._hooks.dispatch(after_register_event(resolved), name, entry.config, priority)

    def unregister(self, kind: KindLike, name: str) -> bool:
        """Remove the contribution *name* of *kind*.

        Returns:
            ``True`` if an entry was removed.
        """
        resolved = _resolve_kind(kind)
        if resolved is None:
            return False
        removed = self._entries.pop((resolved, name), None)
        return removed is not None

    def _write(
        self, kind: ExtensionKind, name: str, config: Any, priority: int
    ) -> ExtensionEntry:
        if not isinstance(name, str) or not name:
            raise RegistrationError(f"{kind.value} name must be a non-empty string")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise RegistrationError(f"{kind.value} '{name}' priority must be an integer")

        model = CONFIG_MODELS[kind]
        validated: BaseModel = (
            config if isinstance(config, model) else model.model_validate(config)
        )

        key = (kind, name)
        existing = self._entries.get(key)
        sequence = existing.sequence if existing is not None else next(self._counter)
        entry = ExtensionEntry(
            kind=kind,
            name=name,
            config=validated,
            priority=priority,
            sequence=sequence,
        )
        self._entries[key] = entry
        return entry

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get_entries(self, kind: KindLike) -> list[ExtensionEntry]:
        """Return the entries of *kind* by ascending priority, then registration order.

        An unknown *kind* has no entries.
        """
        resolved = _resolve_kind(kind)
        if resolved is None:
            return []
        entries = [entry for (k, _), entry in self._entries.items() if k is resolved]
        return sorted(entries, key=lambda entry: (entry.priority, entry.sequence))

    def get_sorted(self, kind: KindLike) -> list[Any]:
        """Return the configs of *kind* in render order. Recomputed on every call."""
        return [entry.config for entry in self.get_entries(kind)]

    def get(self, kind: KindLike, name: str) -> Optional[Any]:
        entry = self._entries.get((_resolve_kind(kind), name))
        return entry.config if entry is not None else None

    def has(self, kind: KindLike, name: str) -> bool:
        return (_resolve_kind(kind), name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
