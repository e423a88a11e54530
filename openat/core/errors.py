"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all openat CLI commands.
"""

from typing import NoReturn

import click

from openat.ports.instance import InstanceUnreachableError


class OpenAtCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise OpenAtCliError(
            "Could not reach an existing instance",
            hint="Start one with 'openat listen'",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize the error with message and optional hint.

        Args:
            message: The primary error message.
            hint: Optional actionable suggestion for the user.
        """
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def instance_unreachable_error(error: InstanceUnreachableError) -> NoReturn:
    """Raise the single user-facing error for every notifier failure.

    Args:
        error: The channel, connect or write failure.

    Raises:
        OpenAtCliError: Always raises with the underlying reason.
    """
    raise OpenAtCliError(
        f"Could not reach an existing instance: {error.message}",
        hint=error.hint,
    ) from error


def no_socket_address_error() -> NoReturn:
    """Raise error when the local socket address cannot be determined.

    Raises:
        OpenAtCliError: Always raises with configuration hint.
    """
    raise OpenAtCliError(
        "Cannot determine the local socket address",
        hint="Set OPENAT_SOCKET or instance.socket_path in the config file",
    )
