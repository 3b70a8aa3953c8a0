"""Abstract base class for gqlide extensions.

Every extension must subclass :class:`Extension` and implement the
:attr:`name` property and :meth:`activate`. Extensions are registered as
entry points in the ``gqlide.extensions`` group and discovered at runtime
by :class:`~gqlide.extensions.manager.ExtensionManager`.

Example:
    Minimal extension contributing a toolbar button::

        class ShareButton(Extension):
            @property
            def name(self) -> str:
                return "share-button"

            def activate(self, context):
                register_toolbar_button(
                    context, "share", {"label": "Share", "command": share}
                )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gqlide.context import EditorContext


class Extension(ABC):
    """Base class for all gqlide extensions.

    The extension lifecycle is:

    1. Instantiation -- the manager calls the no-arg constructor.
    2. :meth:`activate` -- called once with the editor context. This is
       where contributions are registered and hooks subscribed.
    3. :meth:`cleanup` -- called once when the editor is torn down.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique extension name used for discovery and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def activate(self, context: EditorContext) -> None:
        """Register contributions and subscribe to hooks.

        Args:
            context: The editor context carrying the hook bus, the
                extension registry and the store.
        """
        ...

    def cleanup(self) -> None:
        """Release resources acquired in :meth:`activate`."""
