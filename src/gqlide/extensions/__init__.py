"""Extension points of the editor.

Contributions (toolbar buttons, activity panels) are stored in the
:class:`ExtensionRegistry`. Third-party packages ship :class:`Extension`
subclasses that the :class:`ExtensionManager` discovers through entry
points and activates against an editor context.
"""

from gqlide.extensions.api import register_activity_panel, register_toolbar_button
from gqlide.extensions.base import Extension
from gqlide.extensions.core import register_core_extensions
from gqlide.extensions.manager import ENTRY_POINT_GROUP, ExtensionManager
from gqlide.extensions.registry import ExtensionRegistry

__all__ = [
    "ENTRY_POINT_GROUP",
    "Extension",
    "ExtensionManager",
    "ExtensionRegistry",
    "register_activity_panel",
    "register_core_extensions",
    "register_toolbar_button",
]
