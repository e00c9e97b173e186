from enum import Enum


class FetchState(str, Enum):
    """States of an incremental fetch session."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    ERROR = "ERROR"
    EXHAUSTED = "EXHAUSTED"

    @property
    def is_terminal(self) -> bool:
        """Only reset() leaves a terminal state."""
        return self is FetchState.EXHAUSTED
