"""State machine for the ranking session lifecycle."""

from enum import Enum

import structlog

from anchorscore.session.errors import SessionError


logger = structlog.get_logger()


class SessionState(str, Enum):
    """State of a ranking session.

    - EMPTY: No list loaded yet
    - FETCHING: A fetch is in flight (at most one at a time)
    - READY: A list is loaded and can be edited or interpolated
    """

    EMPTY = "EMPTY"
    FETCHING = "FETCHING"
    READY = "READY"


# A failed fetch returns to the state it started from.
_VALID_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.EMPTY: {SessionState.FETCHING, SessionState.READY},
    SessionState.FETCHING: {SessionState.EMPTY, SessionState.READY},
    SessionState.READY: {SessionState.FETCHING, SessionState.READY},
}


class SessionStateTransitionError(SessionError):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        session_id: str,
        from_state: SessionState,
        to_state: SessionState,
    ) -> None:
        """Initialize the transition error.

        Args:
            session_id: Identifier of the session.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.session_id = session_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal session state transition for '{session_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class SessionStateMachine:
    """Manages state transitions for a ranking session.

    Enforces valid transitions and logs all state changes.
    """

    def __init__(
        self,
        session_id: str,
        initial_state: SessionState = SessionState.EMPTY,
    ) -> None:
        """Initialize the state machine.

        Args:
            session_id: Identifier for the session.
            initial_state: Starting state.
        """
        self._session_id = session_id
        self._state = initial_state
        self._log = logger.bind(
            component="session",
            session_id=session_id,
        )

    @property
    def session_id(self) -> str:
        """Get the session identifier."""
        return self._session_id

    @property
    def state(self) -> SessionState:
        """Get the current state."""
        return self._state

    def can_transition_to(self, target: SessionState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: SessionState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            SessionStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_session_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise SessionStateTransitionError(
                session_id=self._session_id,
                from_state=self._state,
                to_state=target,
            )

        old_state = self._state
        self._state = target
        self._log.info(
            "session_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def to_fetching(self) -> None:
        """Transition to FETCHING state."""
        self.transition_to(SessionState.FETCHING)

    def to_ready(self) -> None:
        """Transition to READY state."""
        self.transition_to(SessionState.READY)

    def to_empty(self) -> None:
        """Transition to EMPTY state."""
        self.transition_to(SessionState.EMPTY)
