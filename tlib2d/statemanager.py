"""A stack of game states with enter and exit notifications."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Optional, TypeVar


class State:
    """A state that is told when it becomes active and when it is removed."""

    active: bool = False

    def on_enter(self) -> None:
        """Mark the state as active."""
        self.active = True

    def on_exit(self) -> None:
        """Mark the state as no longer active."""
        self.active = False


class GameState(State):
    """A state with the usual game-loop hooks."""

    initialized: bool = False
    elapsed: float = 0.0
    last_render_delta: float = 0.0

    def init(self) -> None:
        """Mark the state as initialised and reset its clock."""
        self.initialized = True
        self.elapsed = 0.0

    def update(self, delta: float) -> None:
        """Advance the state's clock by ``delta`` seconds."""
        self.elapsed += delta

    def render(self, delta: float) -> None:
        """Remember the frame time of the most recent render."""
        self.last_render_delta = delta


S = TypeVar("S", bound=State)


class StateManager(Generic[S]):
    """Keeps states on a stack; the most recently pushed one is current."""

    def __init__(self) -> None:
        self._states: Deque[S] = deque()

    def push_state(self, state: S) -> None:
        if not isinstance(state, State):
            raise TypeError("state must derive from State")
        self._states.appendleft(state)
        state.on_enter()

    def pop_state(self) -> Optional[S]:
        """Remove and return the current state, or None if there is none."""
        if not self._states:
            return None
        state = self._states[0]
        state.on_exit()
        self._states.popleft()
        return state

    def pop_all(self) -> None:
        while self._states:
            self.pop_state()

    def current(self) -> Optional[S]:
        return self._states[0] if self._states else None

    def __len__(self) -> int:
        return len(self._states)