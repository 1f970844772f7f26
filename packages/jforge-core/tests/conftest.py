"""Shared pytest fixtures for jforge-core tests.

Provides source tree builders, a structlog test configuration, and a
BuildConfig wired to the fake JDK scripts in testing/fixtures/fake_jdk.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog

from jforge_core.config import BuildConfig

FAKE_JDK_DIR = Path(__file__).resolve().parents[3] / "testing" / "fixtures" / "fake_jdk"
SOURCE_ROOT = Path("src") / "main" / "java"

MAIN_JAVA = """\
package main.java;

public class Main {
    public static void main(String[] args) {
        System.out.println("Hello from main.java.Main");
    }
}
"""


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Route structlog through stdlib logging, as configure_logging does."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture creating files below tmp_path.

    Keys ending in "/" create empty directories.

    Returns:
        Function taking {relative path: content} and returning tmp_path.
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
def fake_jdk_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the fake JDK invocation log at tmp_path.

    Returns:
        Path of the JSON-lines log written by the fake tools.
    """
    log_path = tmp_path / "fake_jdk.log"
    monkeypatch.setenv("JFORGE_FAKE_JDK_LOG", str(log_path))
    return log_path


@pytest.fixture
def fake_jdk_config(tmp_path: Path, fake_jdk_log: Path) -> BuildConfig:
    """Return a BuildConfig rooted in tmp_path that runs the fake JDK.

    Returns:
        BuildConfig with absolute source root and output directory.
    """
    return BuildConfig(
        source_root=tmp_path / SOURCE_ROOT,
        output_dir=tmp_path / "classes",
        compiler=(sys.executable, str(FAKE_JDK_DIR / "javac.py")),
        runner=(sys.executable, str(FAKE_JDK_DIR / "java.py")),
    )


def read_jdk_log(log_path: Path) -> list[dict[str, Any]]:
    """Return the fake JDK invocations recorded so far."""
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text().splitlines()]


@pytest.fixture
def jdk_calls(fake_jdk_log: Path) -> Callable[[], list[dict[str, Any]]]:
    """Return a function listing fake JDK invocations.

    Returns:
        Callable returning [{"tool": "javac" | "java", "argv": [...]}, ...].
    """
    return lambda: read_jdk_log(fake_jdk_log)


class CommandRecorder:
    """Stand-in for run_command that records argv and returns canned codes.

    Attributes:
        calls: Argument vectors in invocation order.
        exit_codes: Codes returned per call; 0 once exhausted.
        error: Exception raised instead of returning, if set.
    """

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


@pytest.fixture
def main_java() -> str:
    """Return a minimal valid source defining main.java.Main."""
    return MAIN_JAVA
