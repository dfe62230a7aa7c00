"""Error types for the interpolation engine."""


class InterpolationError(Exception):
    """Base exception for interpolation errors."""


class InterpolationPreconditionError(InterpolationError):
    """Raised when the input sequence cannot be interpolated.

    The engine refuses to run rather than produce meaningless numbers.
    Callers surface this to the user as "nothing to generate".
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize the precondition error.

        Args:
            message: Human-readable error message.
            position: Position of the offending item, if any.
        """
        self.message = message
        self.position = position
        super().__init__(message)
