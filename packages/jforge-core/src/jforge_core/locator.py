"""Recursive source file discovery.

Walks a directory tree depth-first in directory-listing order and yields
every regular file whose name ends with a given extension. Results are not
sorted; callers that need a stable order sort them.

Symbolic links are not followed unless requested. When they are, each real
directory is visited once so link cycles terminate.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from jforge_core.errors import FilesystemError
from jforge_core.observability import get_logger

logger = get_logger(__name__)


def iter_source_files(
    root: str | os.PathLike[str],
    extension: str,
    *,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield files under root whose names end with extension.

    Args:
        root: Directory to walk. Yielded paths are joined onto it, so a
            relative root yields relative paths.
        extension: Name suffix to match (e.g. ".java").
        follow_symlinks: Treat symlinks like their targets.

    Yields:
        Paths of matching regular files, depth-first in listing order.

    Raises:
        ValueError: If extension is empty.
        FilesystemError: If root or any directory below it cannot be listed.
    """
    if not extension:
        raise ValueError("extension must be a non-empty string")

    root_path = Path(root)
    if not root_path.is_dir():
        if root_path.exists():
            raise FilesystemError(f"Not a directory: {root_path}", path=root_path)
        raise FilesystemError(f"Source directory not found: {root_path}", path=root_path)

    visited: set[tuple[int, int]] = set()
    yield from _walk(root_path, extension, follow_symlinks, visited)


def _walk(
    directory: Path,
    extension: str,
    follow_symlinks: bool,
    visited: set[tuple[int, int]],
) -> Iterator[Path]:
    try:
        if follow_symlinks:
            st = directory.stat()
            key = (st.st_dev, st.st_ino)
            if key in visited:
                return
            visited.add(key)
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        raise FilesystemError(
            f"Cannot list directory: {directory}",
            path=directory,
            internal_details=str(e),
        ) from e

    for entry in entries:
        path = directory / entry.name
        if entry.is_dir(follow_symlinks=follow_symlinks):
            yield from _walk(path, extension, follow_symlinks, visited)
        elif entry.is_file(follow_symlinks=follow_symlinks) and entry.name.endswith(extension):
            yield path


def find_source_files(
    root: str | os.PathLike[str],
    extension: str,
    *,
    follow_symlinks: bool = False,
) -> list[Path]:
    """Return every file under root whose name ends with extension.

    The list is fully materialized and ordered as the directories were
    listed.

    Args:
        root: Directory to walk.
        extension: Name suffix to match (e.g. ".java").
        follow_symlinks: Treat symlinks like their targets.

    Returns:
        Matching file paths.

    Raises:
        ValueError: If extension is empty.
        FilesystemError: If root or any directory below it cannot be listed.

    Example:
        >>> find_source_files("src/main/java", ".java")
        [PosixPath('src/main/java/main/java/Main.java'), ...]
    """
    files = list(iter_source_files(root, extension, follow_symlinks=follow_symlinks))
    logger.debug("sources_discovered", root=str(root), extension=extension, count=len(files))
    return files
