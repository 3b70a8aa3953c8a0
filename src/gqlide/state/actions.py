"""The actions accepted by the editor reducer.

Each action is a small frozen dataclass; the class itself is the tag. Any
object that is not one of these classes is treated as an unknown action
and leaves the state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class SetQuery:
    query: Optional[str]


@dataclass(frozen=True)
class SetSchema:
    """Replace the schema. ``None`` invalidates it and asks for a refetch."""

    schema: Any


@dataclass(frozen=True)
class SetDrawerOpen:
    is_drawer_open: bool


@dataclass(frozen=True)
class SetRenderStandalone:
    should_render_standalone: bool


@dataclass(frozen=True)
class SetInitialStateLoaded:
    pass


@dataclass(frozen=True)
class RegisterExtension:
    name: str
    config: Any


@dataclass(frozen=True)
class SetIsFetching:
    is_fetching: bool


@dataclass(frozen=True)
class SetAuthenticated:
    is_authenticated: bool


@dataclass(frozen=True)
class ToggleAuthenticated:
    pass


Action = Union[
    SetQuery,
    SetSchema,
    SetDrawerOpen,
    SetRenderStandalone,
    SetInitialStateLoaded,
    RegisterExtension,
    SetIsFetching,
    SetAuthenticated,
    ToggleAuthenticated,
]
