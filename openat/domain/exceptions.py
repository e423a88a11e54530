"""Domain exceptions for openat.

These exceptions represent invalid user input at the domain level. They
should be caught at the application boundary (CLI) and converted to
user-facing error messages.
"""


class OpenAtDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class DanglingLineArgumentError(OpenAtDomainError):
    """Raised when a '+LINE' argument is not followed by a path."""

    pass
