"""Error types for the ranking session."""


class SessionError(Exception):
    """Base exception for session errors."""


class FetchInProgressError(SessionError):
    """Raised when a fetch is requested while another is in flight."""

    def __init__(self, session_id: str) -> None:
        """Initialize the error.

        Args:
            session_id: Identifier of the session.
        """
        self.session_id = session_id
        super().__init__(f"A fetch is already in progress for session '{session_id}'")


class ScoreOutOfRangeError(SessionError):
    """Raised when a manual score edit falls outside the scale."""

    def __init__(self, score: float, minimum: float, maximum: float) -> None:
        """Initialize the error.

        Args:
            score: The rejected score.
            minimum: Lowest allowed score.
            maximum: Highest allowed score.
        """
        self.score = score
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Score {score} outside [{minimum}, {maximum}]")
