"""CLI error handling for jforge-cli.

Wraps jforge-core exceptions in a single top-level handler that prints
an "Error: <message>" diagnostic and exits with status 1. The failure
taxonomy is coarse: every failure maps to the same exit code and is told
apart only by its message.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from jforge_cli.output import error
from jforge_core.errors import JForgeError
from jforge_core.observability import get_logger

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(f"Error: {self.format_message()}")


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - extension: Value error, Extension must start with '.'..."
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}")

    return "\n".join(lines)


def handle_build_error(err: JForgeError) -> NoReturn:
    """Convert a pipeline error into a CLI error.

    Args:
        err: Error raised by the build pipeline.

    Raises:
        CLIError: Always raises with the error's user message.
    """
    logger.debug(
        "build_error",
        error_type=type(err).__name__,
        stage=err.stage.value,
        internal_details=err.internal_details,
    )
    raise CLIError(err.user_message) from err


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Convert an invalid build configuration into a CLI error.

    Args:
        err: Pydantic ValidationError instance.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(f"Invalid build configuration:\n{format_pydantic_error(err)}") from err


@contextmanager
def build_errors() -> Iterator[None]:
    """Report pipeline and configuration errors, then exit with status 1.

    The `Error: <message>` line is printed here, not by Click's own
    exception display.

    Raises:
        click.exceptions.Exit: With the CLIError's exit code.

    Example:
        >>> with build_errors():
        ...     BuildRunner(config).execute()
    """
    try:
        try:
            yield
        except JForgeError as e:
            handle_build_error(e)
        except PydanticValidationError as e:
            handle_validation_error(e)
    except CLIError as e:
        e.show()
        raise click.exceptions.Exit(e.exit_code) from e
