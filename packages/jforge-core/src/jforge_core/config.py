"""Build configuration model.

Holds the fixed paths, tool commands and entry point used by the build
pipeline. The defaults are the values the pipeline always uses; other
values are only supplied by library callers and tests.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SOURCE_ROOT = "src/main/java"
DEFAULT_EXTENSION = ".java"
DEFAULT_OUTPUT_DIR = "classes"
DEFAULT_ENTRY_POINT = "main.java.Main"


class BuildConfig(BaseModel):
    """Configuration for the compile-then-run pipeline.

    Attributes:
        source_root: Directory walked for source files
        extension: Source file suffix
        output_dir: Directory receiving compiled artifacts
        compile_classpath: Dependency search path passed to the compiler
        compiler: Compiler command prefix
        runner: Runner command prefix
        entry_point: Class executed after compilation
        follow_symlinks: Follow symbolic links while walking the source root
        sort_sources: Sort discovered sources before compiling

    Example:
        >>> config = BuildConfig()
        >>> config.compiler
        ('javac',)
        >>> BuildConfig(runner="java -Xmx512m").runner
        ('java', '-Xmx512m')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_root: Path = Field(default=Path(DEFAULT_SOURCE_ROOT), description="Source root")
    extension: str = Field(default=DEFAULT_EXTENSION, description="Source file extension")
    output_dir: Path = Field(default=Path(DEFAULT_OUTPUT_DIR), description="Output directory")
    compile_classpath: str = Field(
        default=".", min_length=1, description="Compiler dependency search path"
    )
    compiler: tuple[str, ...] = Field(default=("javac",), description="Compiler command")
    runner: tuple[str, ...] = Field(default=("java",), description="Runner command")
    entry_point: str = Field(default=DEFAULT_ENTRY_POINT, min_length=1, description="Entry point")
    follow_symlinks: bool = Field(default=False, description="Follow symbolic links")
    sort_sources: bool = Field(default=True, description="Sort sources before compiling")

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Require a non-empty suffix starting with a dot."""
        if len(v) < 2 or not v.startswith("."):
            msg = f"Extension must start with '.' and name a suffix, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("compiler", "runner", mode="before")
    @classmethod
    def split_command(cls, v: Any) -> Any:
        """Accept a shell-style command string as well as a sequence."""
        if isinstance(v, str):
            return tuple(shlex.split(v))
        return v

    @field_validator("compiler", "runner")
    @classmethod
    def validate_command(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least an executable name."""
        if not v or not v[0]:
            raise ValueError("Command must name an executable")
        return v


DEFAULT_CONFIG = BuildConfig()
"""Configuration with every fixed default."""
