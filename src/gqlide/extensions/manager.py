"""Extension manager -- discovery, loading, and lifecycle management.

Third-party packages register extensions by declaring an entry point under
the ``gqlide.extensions`` group in their ``pyproject.toml``::

    [project.entry-points."gqlide.extensions"]
    share-button = "my_package.extension:ShareButton"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from gqlide.exceptions import ExtensionError
from gqlide.extensions.base import Extension
from gqlide.models import GlobalConfig

if TYPE_CHECKING:
    from gqlide.context import EditorContext

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "gqlide.extensions"
"""The entry-point group name used for extension discovery."""


class ExtensionManager:
    """Discovers, activates, and cleans up gqlide extensions.

    The *enabled* and *disabled* lists in
    :class:`~gqlide.models.ExtensionsConfig` act as an explicit
    allowlist/blocklist. When *enabled* is non-empty only those extensions
    are loaded; otherwise every discovered extension not in *disabled* is.

    Example::

        manager = ExtensionManager()
        loaded = manager.discover(global_config, context)
    """

    def __init__(self) -> None:
        self._extensions: dict[str, Extension] = {}

    def discover(self, config: GlobalConfig, context: EditorContext) -> list[str]:
        """Load every extension published under :data:`ENTRY_POINT_GROUP`.

        Extensions that fail to import or activate are logged as warnings
        and skipped so that one broken extension does not block the others.

        Returns:
            Names of the extensions that were activated.
        """
        loaded_names: list[str] = []
        enabled_set = set(config.extensions.enabled)
        disabled_set = set(config.extensions.disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name

            if enabled_set and name not in enabled_set:
                logger.debug("Extension '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Extension '%s' is disabled, skipping", name)
                continue

            try:
                extension_cls = ep.load()
                extension: Extension = extension_cls()
                self.load_extension(name, extension, context)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load extension '%s': %s", name, exc)

        return loaded_names

    def load_extension(self, name: str, extension: Extension, context: EditorContext) -> None:
        """Activate *extension* against *context* and keep it under *name*.

        Raises:
            ExtensionError: If an extension with the same *name* is already loaded.
        """
        if name in self._extensions:
            raise ExtensionError(f"Extension '{name}' is already loaded")

        extension.activate(context)
        self._extensions[name] = extension
        logger.info("Loaded extension '%s' v%s", name, extension.version)

    def get_extension(self, name: str) -> Extension:
        """Return the loaded extension called *name*.

        Raises:
            ExtensionError: If no such extension is loaded.
        """
        try:
            return self._extensions[name]
        except KeyError:
            raise ExtensionError(f"Extension '{name}' is not loaded") from None

    def list_extensions(self) -> list[dict[str, str]]:
        """Describe the loaded extensions as ``name``/``version``/``description`` dicts."""
        return [
            {
                "name": extension.name,
                "version": extension.version,
                "description": extension.description,
            }
            for extension in self._extensions.values()
        ]

    def cleanup(self) -> None:
        """Call :meth:`~Extension.cleanup` on every extension, then forget them all.

        Errors from individual extensions are logged and swallowed.
        """
        for name, extension in self._extensions.items():
            try:
                extension.cleanup()
            except Exception as exc:
                logger.warning("Error cleaning up extension '%s': %s", name, exc)
        self._extensions.clear()
