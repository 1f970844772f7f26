"""jforge-core: Source discovery and the compile-then-run build pipeline.

This package provides:
- find_source_files: Recursive source file discovery
- BuildRunner: Compile every source, then run the fixed entry point
- BuildConfig: Fixed paths, tool commands and entry point
- The error hierarchy raised by the pipeline
"""

from __future__ import annotations

__version__ = "0.1.0"

from jforge_core.config import DEFAULT_CONFIG, BuildConfig
from jforge_core.errors import (
    CompileFailure,
    EmptyInputError,
    FilesystemError,
    JForgeError,
    RunFailure,
    StepFailure,
    ToolNotFoundError,
)
from jforge_core.locator import find_source_files, iter_source_files
from jforge_core.models import BuildResult, BuildStage
from jforge_core.observability import configure_logging
from jforge_core.process import run_command
from jforge_core.runner import BuildRunner, build

__all__ = [
    "__version__",
    # Pipeline
    "BuildRunner",
    "build",
    "BuildResult",
    "BuildStage",
    # Configuration
    "BuildConfig",
    "DEFAULT_CONFIG",
    # Discovery and processes
    "find_source_files",
    "iter_source_files",
    "run_command",
    "configure_logging",
    # Errors
    "JForgeError",
    "FilesystemError",
    "ToolNotFoundError",
    "EmptyInputError",
    "StepFailure",
    "CompileFailure",
    "RunFailure",
]
