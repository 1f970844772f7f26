"""Compile-then-run build pipeline.

Orchestrates the two external steps: discover sources, compile them all
into the output directory, then run the fixed entry point from it. Every
failure is fatal and immediate; the output directory is left in place.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from pathlib import Path

from jforge_core.config import BuildConfig
from jforge_core.errors import (
    CompileFailure,
    EmptyInputError,
    FilesystemError,
    JForgeError,
    RunFailure,
)
from jforge_core.locator import find_source_files
from jforge_core.models import BuildResult, BuildStage
from jforge_core.observability import get_logger, span
from jforge_core.process import run_command

logger = get_logger(__name__)

StageCallback = Callable[[BuildStage, int], None]
"""Called on each stage transition with the number of discovered sources."""


class BuildRunner:
    """Runs the compile-then-run pipeline for one configuration.

    Attributes:
        config: Build configuration
        stage: Current pipeline stage

    Example:
        >>> runner = BuildRunner()
        >>> result = runner.execute()
        >>> result.stage
        <BuildStage.DONE: 'done'>
    """

    def __init__(
        self,
        config: BuildConfig | None = None,
        *,
        on_stage: StageCallback | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Build configuration (default: all fixed defaults)
            on_stage: Optional callback notified on every stage transition
        """
        self.config = config or BuildConfig()
        self.stage = BuildStage.START
        self._on_stage = on_stage
        self._source_count = 0
        self._log = logger.bind(component="build_runner")

    def _advance(self, stage: BuildStage) -> None:
        self.stage = stage
        self._log.info("stage_changed", stage=stage.value, sources=self._source_count)
        if self._on_stage is not None:
            self._on_stage(stage, self._source_count)

    def ensure_output_dir(self) -> Path:
        """Create the output directory and any missing parents.

        Idempotent: an existing directory and its contents are left untouched.

        Returns:
            The output directory path.

        Raises:
            FilesystemError: If the directory cannot be created.
        """
        output_dir = self.config.output_dir
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Cannot create output directory: {output_dir}",
                path=output_dir,
                stage=self.stage,
                internal_details=str(e),
            ) from e
        return output_dir

    def discover_sources(self) -> list[Path]:
        """Locate every source file under the source root.

        Returns:
            Source paths, sorted lexicographically when sort_sources is set,
            otherwise in directory-listing order.

        Raises:
            FilesystemError: If the source root cannot be walked.
        """
        try:
            sources = find_source_files(
                self.config.source_root,
                self.config.extension,
                follow_symlinks=self.config.follow_symlinks,
            )
        except FilesystemError as e:
            e.stage = self.stage
            raise
        if self.config.sort_sources:
            sources.sort(key=str)
        return sources

    def compile_args(self, sources: Sequence[Path]) -> list[str]:
        """Build the compiler argument vector.

        Args:
            sources: Files to compile.

        Returns:
            ``<compiler> -d <output-dir> -cp <classpath> <sources...>``
        """
        return [
            *self.config.compiler,
            "-d",
            str(self.config.output_dir),
            "-cp",
            self.config.compile_classpath,
            *(str(s) for s in sources),
        ]

    def run_args(self) -> list[str]:
        """Build the runner argument vector.

        Returns:
            ``<runner> -cp <output-dir> <entry-point>``
        """
        return [
            *self.config.runner,
            "-cp",
            str(self.config.output_dir),
            self.config.entry_point,
        ]

    def compile(self, sources: Sequence[Path]) -> int:
        """Compile every source into the output directory.

        Args:
            sources: Files to compile.

        Returns:
            Compiler exit status (always 0).

        Raises:
            CompileFailure: If the compiler exits non-zero.
            ToolNotFoundError: If the compiler cannot be started.
        """
        argv = self.compile_args(sources)
        with span("compile", attributes={"build.sources": len(sources)}) as s:
            exit_code = run_command(argv)
            s.set_attribute("process.exit_code", exit_code)
            if exit_code != 0:
                raise CompileFailure(exit_code, argv)
        return exit_code

    def run_entry_point(self) -> int:
        """Run the entry point from the output directory.

        Returns:
            Entry point exit status (always 0).

        Raises:
            RunFailure: If the entry point exits non-zero.
            ToolNotFoundError: If the runner cannot be started.
        """
        argv = self.run_args()
        with span("run", attributes={"build.entry_point": self.config.entry_point}) as s:
            exit_code = run_command(argv)
            s.set_attribute("process.exit_code", exit_code)
            if exit_code != 0:
                raise RunFailure(exit_code, argv)
        return exit_code

    def execute(self, *, run: bool = True) -> BuildResult:
        """Run the whole pipeline.

        Args:
            run: Run the entry point after a successful compile. When False
                the pipeline stops at compile_succeeded.

        Returns:
            BuildResult for a pipeline that finished without error.

        Raises:
            FilesystemError: Output directory or source root problems.
            EmptyInputError: No sources were found; the compiler is not run.
            CompileFailure: The compiler failed; the entry point is not run.
            RunFailure: The entry point failed.
        """
        start_time = time.monotonic()
        self._log.info(
            "build_started",
            source_root=str(self.config.source_root),
            output_dir=str(self.config.output_dir),
        )

        try:
            self.ensure_output_dir()
            self._advance(BuildStage.DIRECTORY_ENSURED)

            sources = self.discover_sources()
            self._source_count = len(sources)
            self._advance(BuildStage.FILES_DISCOVERED)

            if not sources:
                self._advance(BuildStage.EMPTY_EXIT)
                raise EmptyInputError(self.config.source_root, self.config.extension)

            self._advance(BuildStage.COMPILING)
            try:
                compile_exit_code = self.compile(sources)
            except JForgeError as e:
                self._fail(e, BuildStage.COMPILE_FAILED)
                raise
            self._advance(BuildStage.COMPILE_SUCCEEDED)

            run_exit_code = None
            if run:
                self._advance(BuildStage.RUNNING)
                try:
                    run_exit_code = self.run_entry_point()
                except JForgeError as e:
                    self._fail(e, BuildStage.RUN_FAILED)
                    raise
                self._advance(BuildStage.DONE)
        except JForgeError as e:
            self._log.info(
                "build_failed",
                stage=self.stage.value,
                error_type=type(e).__name__,
                internal_details=e.internal_details,
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
            raise

        duration_ms = int((time.monotonic() - start_time) * 1000)
        self._log.info("build_completed", stage=self.stage.value, duration_ms=duration_ms)

        return BuildResult(
            stage=self.stage,
            sources=sources,
            compile_exit_code=compile_exit_code,
            run_exit_code=run_exit_code,
            duration_ms=duration_ms,
        )

    def _fail(self, error: JForgeError, stage: BuildStage) -> None:
        error.stage = stage
        self._advance(stage)


def build(config: BuildConfig | None = None, *, run: bool = True) -> BuildResult:
    """Compile all sources and run the entry point.

    Convenience wrapper around BuildRunner.execute().

    Args:
        config: Build configuration (default: all fixed defaults)
        run: Run the entry point after compiling

    Returns:
        BuildResult of the finished pipeline.
    """
    return BuildRunner(config).execute(run=run)
