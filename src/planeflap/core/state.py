"""
Flow state machine for planeflap.

States:
    LOADING: A game state is being (re)built (preload + create)
    PLAYING: The plane is alive and the spawn timer is running
    DEAD: The plane hit a pipe; the scene is frozen until it falls out
"""

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Callable, Dict, FrozenSet
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    LOADING = auto()
    PLAYING = auto()
    DEAD = auto()


@dataclass
class StateContext:
    """Data that survives state rebuilds."""
    current_state: str | None = None
    restarts: int = 0
    last_score: int = 0


Listener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Tracks the alive -> dead -> restart flow.

    transition() refuses moves not listed in VALID_TRANSITIONS and
    notifies listeners after every accepted one.
    """

    VALID_TRANSITIONS: Dict[State, FrozenSet[State]] = {
        State.LOADING: frozenset({State.PLAYING}),
        # LOADING: fell out of the screen while still alive
        State.PLAYING: frozenset({State.DEAD, State.LOADING}),
        State.DEAD: frozenset({State.LOADING}),
    }

    def __init__(self, initial_state: State = State.LOADING) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in self.VALID_TRANSITIONS.get(self._state, frozenset())

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Move to to_state, applying context_updates to the context.

        Unknown context keys are ignored.

        Returns:
            False if the transition isn't allowed from the current state
        """
        if not self.can_transition(to_state):
            logger.warning(f"Invalid transition: {self._state.name} -> {to_state.name}")
            return False

        known = {f.name for f in fields(self._context)}
        for key, value in context_updates.items():
            if key in known:
                setattr(self._context, key, value)

        old_state, self._state = self._state, to_state
        logger.debug(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
