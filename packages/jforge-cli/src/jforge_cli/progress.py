"""Console progress messages for the build pipeline."""

from __future__ import annotations

from jforge_cli.output import info, success, warning
from jforge_core.config import BuildConfig
from jforge_core.models import BuildStage
from jforge_core.runner import StageCallback


def language_label(extension: str) -> str:
    """Name the source language after its extension (".java" -> "Java")."""
    return extension.lstrip(".").capitalize()


def stage_reporter(config: BuildConfig) -> StageCallback:
    """Create a stage callback that prints one line per pipeline step.

    Args:
        config: Build configuration, used to name the source language.

    Returns:
        Callback for BuildRunner(on_stage=...).
    """
    label = language_label(config.extension)

    def _report(stage: BuildStage, source_count: int) -> None:
        if stage is BuildStage.FILES_DISCOVERED:
            info(f"Found {source_count} {label} files")
        elif stage is BuildStage.EMPTY_EXIT:
            warning(f"No {label} files found to compile")
        elif stage is BuildStage.COMPILING:
            info(f"Compiling {label} files...")
        elif stage is BuildStage.COMPILE_SUCCEEDED:
            success("Compilation successful!")
        elif stage is BuildStage.RUNNING:
            info("Running the application...")

    return _report
