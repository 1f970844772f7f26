"""External process invocation with live output.

Children inherit the parent's standard streams, so compiler diagnostics and
application output reach the terminal as they are written. Calls block until
the child exits; there is no timeout.
"""

from __future__ import annotations

import os
import subprocess
import sys
import time
from collections.abc import Sequence

from jforge_core.errors import ToolNotFoundError
from jforge_core.observability import get_logger

logger = get_logger(__name__)


def run_command(
    argv: Sequence[str],
    *,
    cwd: str | os.PathLike[str] | None = None,
) -> int:
    """Run a command to completion and return its exit status.

    The child is always waited on, including when the parent is interrupted
    while waiting; in that case it is killed first and the interrupt is
    re-raised.

    Args:
        argv: Executable followed by its arguments.
        cwd: Working directory for the child (default: current directory).

    Returns:
        Exit status of the child. Negative values mean it was killed by a
        signal.

    Raises:
        ValueError: If argv is empty.
        ToolNotFoundError: If the executable cannot be started.
    """
    if not argv:
        raise ValueError("argv must name an executable")

    args = [str(a) for a in argv]
    log = logger.bind(executable=args[0], argc=len(args))
    start_time = time.monotonic()

    # Our own buffered output must land before the child's
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        proc = subprocess.Popen(args, cwd=cwd)  # nosec B603
    except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
        raise ToolNotFoundError(args[0], internal_details=str(e)) from e

    with proc:
        try:
            exit_code = proc.wait()
        except KeyboardInterrupt:
            log.warning("process_interrupted", pid=proc.pid)
            proc.kill()
            proc.wait()
            raise

    log.info(
        "process_exited",
        exit_code=exit_code,
        duration_ms=int((time.monotonic() - start_time) * 1000),
    )
    return exit_code
