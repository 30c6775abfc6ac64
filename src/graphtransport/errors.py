class InvalidProblemError(ValueError):
    """Raised when a problem is malformed or degenerate; the message is safe to show to users."""
