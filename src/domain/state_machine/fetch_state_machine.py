from src.domain.enums.fetch_state import FetchState

# Mapping of valid transitions: from_state -> set of allowed to_states
VALID_TRANSITIONS: dict[FetchState, frozenset[FetchState]] = {
    FetchState.IDLE: frozenset({FetchState.LOADING}),
    FetchState.ERROR: frozenset({FetchState.LOADING}),
    FetchState.LOADING: frozenset({FetchState.IDLE, FetchState.ERROR, FetchState.EXHAUSTED}),
    # Terminal; only a session reset leaves it
    FetchState.EXHAUSTED: frozenset(),
}


class InvalidFetchTransitionError(Exception):
    """Raised when an incremental fetch session attempts an invalid transition."""

    def __init__(self, from_state: FetchState, to_state: FetchState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid transition from {from_state.value} to {to_state.value}. "
            f"Allowed transitions: {sorted(s.value for s in VALID_TRANSITIONS.get(from_state, frozenset()))}"
        )


class FetchStateMachine:
    """
    Validates state transitions of an incremental fetch session.

    Stateless: the controller owns the current state and asks before moving.
    """

    def can_transition(self, from_state: FetchState, to_state: FetchState) -> bool:
        if from_state.is_terminal:
            return False
        return to_state in VALID_TRANSITIONS.get(from_state, frozenset())

    def validate_transition(self, from_state: FetchState, to_state: FetchState) -> None:
        if not self.can_transition(from_state, to_state):
            raise InvalidFetchTransitionError(from_state, to_state)

    def get_allowed_transitions(self, from_state: FetchState) -> frozenset[FetchState]:
        return VALID_TRANSITIONS.get(from_state, frozenset())
