"""Shared test fixtures for jforge-cli tests.

Provides CliRunner fixtures, source tree helpers, and BuildConfig objects
that are passed to commands through the Click context object.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from jforge_core.config import BuildConfig

FAKE_JDK_DIR = Path(__file__).resolve().parents[3] / "testing" / "fixtures" / "fake_jdk"

MAIN_JAVA = """\
package main.java;

public class Main {
    public static void main(String[] args) {
        System.out.println("Hello from main.java.Main");
    }
}
"""


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo the logging setup done by the cli group callback."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    This fixture creates a temporary directory and changes to it
    for the duration of the test.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture creating files below tmp_path.

    Keys ending in "/" create empty directories.
    """

    def _create(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            if rel.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _create


@pytest.fixture
def main_java() -> str:
    """Return a minimal valid source defining main.java.Main."""
    return MAIN_JAVA


@pytest.fixture
def config(tmp_path: Path) -> BuildConfig:
    """Return a default-tool BuildConfig rooted in tmp_path."""
    return BuildConfig(
        source_root=tmp_path / "src" / "main" / "java",
        output_dir=tmp_path / "classes",
    )


@pytest.fixture
def fake_jdk_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> BuildConfig:
    """Return a BuildConfig rooted in tmp_path that runs the fake JDK."""
    monkeypatch.setenv("JFORGE_FAKE_JDK_LOG", str(tmp_path / "fake_jdk.log"))
    return BuildConfig(
        source_root=tmp_path / "src" / "main" / "java",
        output_dir=tmp_path / "classes",
        compiler=(sys.executable, str(FAKE_JDK_DIR / "javac.py")),
        runner=(sys.executable, str(FAKE_JDK_DIR / "java.py")),
    )


class CommandRecorder:
    """Stand-in for run_command that records argv and returns canned codes."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.exit_codes: list[int] = []
        self.error: Exception | None = None

    def __call__(self, argv: list[str], **kwargs: Any) -> int:
        self.calls.append(list(argv))
        if self.error is not None:
            raise self.error
        return self.exit_codes.pop(0) if self.exit_codes else 0


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> CommandRecorder:
    """Replace the runner's process invocation with a CommandRecorder."""
    rec = CommandRecorder()
    monkeypatch.setattr("jforge_core.runner.run_command", rec)
    return rec
