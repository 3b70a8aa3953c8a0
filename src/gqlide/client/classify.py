"""Decide whether an operation is introspection-class and which credential mode it gets.

An operation is introspection-class when any field selection anywhere in
the document is ``__schema`` or ``__typename``. Such operations always
carry credentials so the editor can introspect the schema whatever the
user's auth toggle says. Everything else carries credentials only while
the session is authenticated.

A document that does not parse is treated as an ordinary operation: the
server, not this module, decides whether it is valid.
"""

from __future__ import annotations

import logging
from typing import Any

from graphql import BREAK, GraphQLError, Visitor, parse, visit

from gqlide.models import CredentialMode

logger = logging.getLogger(__name__)

INTROSPECTION_FIELDS = frozenset({"__schema", "__typename"})


class _IntrospectionFieldFinder(Visitor):
    """Stops the traversal at the first introspection field."""

    def __init__(self) -> None:
        super().__init__()
        self.found = False

    def enter_field(self, node: Any, *_args: Any) -> Any:
        if node.name.value in INTROSPECTION_FIELDS:
            self.found = True
            return BREAK
        return None


def is_introspection_operation(document: str) -> bool:
    """Return ``True`` if *document* selects ``__schema`` or ``__typename``.

    Parse failures are logged and reported as ``False``.

    Example::

        >>> is_introspection_operation("query { __schema { queryType { name } } }")
        True
        >>> is_introspection_operation("query { posts { nodes { title } } }")
        False
    """
    try:
        ast = parse(document)
    except (GraphQLError, TypeError, RecursionError) as exc:
        logger.error("Error parsing GraphQL query: %s", exc)
        return False

    finder = _IntrospectionFieldFinder()
    visit(ast, finder)
    return finder.found


def select_credential_mode(is_introspection: bool, is_authenticated: bool) -> CredentialMode:
    """Pick :attr:`CredentialMode.INCLUDE` or :attr:`CredentialMode.OMIT`."""
    if is_introspection or is_authenticated:
        return CredentialMode.INCLUDE
    return CredentialMode.OMIT


def classify_operation(document: str, is_authenticated: bool) -> CredentialMode:
    """Parse, classify and pick the credential mode for *document* in one step."""
    return select_credential_mode(is_introspection_operation(document), is_authenticated)
