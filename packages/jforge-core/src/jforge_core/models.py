"""Build pipeline state and result models.

The build pipeline is a fixed sequence of stages:

    start -> directory_ensured -> files_discovered
        -> {empty_exit | compiling}
        -> {compile_failed | compile_succeeded}
        -> running -> {run_failed | done}

All failure stages are terminal.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class BuildStage(str, Enum):
    """Stage of the compile-then-run pipeline.

    Attributes:
        START: Pipeline created, nothing done yet
        DIRECTORY_ENSURED: Output directory exists
        FILES_DISCOVERED: Source files located
        EMPTY_EXIT: No source files found (terminal)
        COMPILING: Compile step in progress
        COMPILE_FAILED: Compiler exited non-zero (terminal)
        COMPILE_SUCCEEDED: Compiler exited zero
        RUNNING: Run step in progress
        RUN_FAILED: Entry point exited non-zero (terminal)
        DONE: Both steps succeeded (terminal)
    """

    START = "start"
    DIRECTORY_ENSURED = "directory_ensured"
    FILES_DISCOVERED = "files_discovered"
    EMPTY_EXIT = "empty_exit"
    COMPILING = "compiling"
    COMPILE_FAILED = "compile_failed"
    COMPILE_SUCCEEDED = "compile_succeeded"
    RUNNING = "running"
    RUN_FAILED = "run_failed"
    DONE = "done"

    @property
    def terminal(self) -> bool:
        """Check if no further transition is possible from this stage."""
        return self in (
            BuildStage.EMPTY_EXIT,
            BuildStage.COMPILE_FAILED,
            BuildStage.RUN_FAILED,
            BuildStage.DONE,
        )

    @property
    def failed(self) -> bool:
        """Check if this stage ends the pipeline with a non-zero exit."""
        return self.terminal and self is not BuildStage.DONE


class BuildResult(BaseModel):
    """Outcome of a pipeline that reached its final stage.

    Attributes:
        stage: Last stage reached
        sources: Source files passed to the compiler, in command-line order
        compile_exit_code: Compiler exit status (None if not run)
        run_exit_code: Entry point exit status (None if not run)
        duration_ms: Wall time of the whole pipeline

    Example:
        >>> result = BuildResult(stage=BuildStage.DONE, compile_exit_code=0, run_exit_code=0)
        >>> result.succeeded
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stage: BuildStage = Field(..., description="Last stage reached")
    sources: list[Path] = Field(default_factory=list, description="Compiled source files")
    compile_exit_code: int | None = Field(default=None, description="Compiler exit status")
    run_exit_code: int | None = Field(default=None, description="Entry point exit status")
    duration_ms: int = Field(default=0, ge=0, description="Duration in milliseconds")

    @property
    def succeeded(self) -> bool:
        """Check if both the compile and run steps succeeded."""
        return self.stage is BuildStage.DONE
