"""The single source of truth for editor state.

:class:`Store` holds the current :class:`~gqlide.state.reducer.EditorState`
and is the only legal write path to it: every change goes through
:meth:`Store.dispatch`. Subscribers are notified only when the reducer
produced a new state object.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from gqlide.state.reducer import EditorState, create_initial_state, reduce

logger = logging.getLogger(__name__)

StateListener = Callable[[EditorState, EditorState], None]


class Store:
    """Holds editor state and applies actions through :func:`reduce`.

    Args:
        initial_state: Starting state; defaults to
            :func:`~gqlide.state.reducer.create_initial_state`.

    Example::

        store = Store()
        unsubscribe = store.subscribe(lambda new, old: print(new.query))
        store.dispatch(SetQuery("{ viewer { name } }"))
    """

    def __init__(self, initial_state: Optional[EditorState] = None) -> None:
        self._state = initial_state if initial_state is not None else create_initial_state()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> EditorState:
        return self._state

    def get_state(self) -> EditorState:
        return self._state

    def dispatch(self, action: object) -> EditorState:
        """Apply *action* and notify subscribers if the state object changed.

        Returns:
            The state after the action.
        """
        previous = self._state
        self._state = reduce(previous, action)
        if self._state is not previous:
            self._notify(self._state, previous)
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener(new_state, old_state)`` after every effective change.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: EditorState, previous: EditorState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state, previous)
            except Exception as exc:
                logger.warning("State listener %r failed: %s", listener, exc)
