"""Exception hierarchy for jforge-core.

This module defines the exception classes raised by the build pipeline:
- JForgeError: Base exception for all jforge errors
- FilesystemError: Source root or output directory problems
- ToolNotFoundError: Compiler or runner executable is missing
- EmptyInputError: No source files were discovered
- CompileFailure / RunFailure: An external step exited non-zero

Every error records the pipeline stage it ended in. User-facing messages
are short and safe to print. Technical details ride along on the exception
and are logged by whoever handles it, once the final stage is known.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jforge_core.models import BuildStage


class JForgeError(Exception):
    """Base exception for jforge.

    Args:
        user_message: Message to display to the user.
        stage: Pipeline stage in which the error ended the build.
        internal_details: Optional technical details, never shown to users.

    Example:
        >>> raise JForgeError(
        ...     "Build failed",
        ...     internal_details="javac returned 2 for 14 files",
        ... )
    """

    stage: BuildStage = BuildStage.START

    def __init__(
        self,
        user_message: str,
        *,
        stage: BuildStage | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize JForgeError with user message and optional details.

        Args:
            user_message: Message to display to the user.
            stage: Pipeline stage, defaults to the class-level stage.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details
        if stage is not None:
            self.stage = stage


class FilesystemError(JForgeError):
    """Raised when the filesystem cannot be read or written as required.

    Use this exception when:
    - The source root does not exist or is not a directory
    - A directory in the source tree cannot be listed
    - The output directory cannot be created

    Attributes:
        path: Path that caused the failure, if known.
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str | Path | None = None,
        stage: BuildStage | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize FilesystemError.

        Args:
            user_message: Message to display to the user.
            path: Offending path.
            stage: Pipeline stage.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, stage=stage, internal_details=internal_details)
        self.path = Path(path) if path is not None else None


class ToolNotFoundError(FilesystemError):
    """Raised when an external tool executable cannot be started.

    Example:
        >>> raise ToolNotFoundError("javac")
        # User sees: "Command not found: javac"
    """

    def __init__(
        self,
        tool: str,
        *,
        stage: BuildStage | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ToolNotFoundError.

        Args:
            tool: Executable name or path that failed to start.
            stage: Pipeline stage.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"Command not found: {tool}",
            path=tool,
            stage=stage,
            internal_details=internal_details,
        )
        self.tool = tool


class EmptyInputError(JForgeError):
    """Raised when the source root holds no matching source files.

    This is a usable-but-empty result rather than a filesystem problem; it
    is reported distinctly but maps to the same exit code.
    """

    stage = BuildStage.EMPTY_EXIT

    def __init__(self, source_root: str | Path, extension: str) -> None:
        """Initialize EmptyInputError.

        Args:
            source_root: Directory that was searched.
            extension: Extension that was searched for.
        """
        super().__init__(f"No {extension} files found under {source_root}")
        self.source_root = Path(source_root)
        self.extension = extension


class StepFailure(JForgeError):
    """Raised when an external pipeline step exits non-zero.

    Attributes:
        step: Step name ("compile" or "run").
        exit_code: Exit status reported by the child process.
        command: Full argument vector that was executed.
    """

    step = "step"

    def __init__(self, exit_code: int, command: Sequence[str] = ()) -> None:
        """Initialize StepFailure.

        Args:
            exit_code: Non-zero exit status of the child.
            command: Argument vector of the child.
        """
        super().__init__(f"{self.step.capitalize()} step failed with exit code {exit_code}")
        self.exit_code = exit_code
        self.command = list(command)


class CompileFailure(StepFailure):
    """Raised when the compiler exits non-zero."""

    step = "compile"
    stage = BuildStage.COMPILE_FAILED


class RunFailure(StepFailure):
    """Raised when the entry point exits non-zero."""

    step = "run"
    stage = BuildStage.RUN_FAILED
