"""Directory traversal with name-based exclusions."""

import os
from pathlib import Path
from typing import Iterable, List

from ..utils.exceptions import TraversalError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def walk(
    root: Path,
    excluded_dir_names: Iterable[str] = (),
    excluded_file_names: Iterable[str] = (),
) -> List[Path]:
    """
    Collect regular files under ``root``.

    Excluded directories are pruned before they are opened. Symlinked
    directories are not followed. Order is whatever the OS listing
    returns.

    Raises:
        TraversalError: a directory could not be listed
    """
    excluded_dirs = frozenset(excluded_dir_names)
    excluded_files = frozenset(excluded_file_names)

    files: List[Path] = []
    pending = [Path(root)]

    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        if entry.name in excluded_dirs:
                            logger.debug(f"Pruned excluded directory: {entry.path}")
                            continue
                        pending.append(Path(entry.path))
                    elif entry.is_file():
                        if entry.name in excluded_files:
                            logger.debug(f"Skipped excluded file: {entry.path}")
                            continue
                        files.append(Path(entry.path))
        except OSError as e:
            raise TraversalError(
                f"Cannot list directory: {directory}",
                details={"error": e.strerror or str(e)},
                suggestion="Check that the directory exists and is readable",
            ) from e

    return files


class TreeWalker:
    """Walker bound to a fixed exclusion configuration."""

    def __init__(self, excluded_dir_names: Iterable[str] = (), excluded_file_names: Iterable[str] = ()):
        self.excluded_dir_names = frozenset(excluded_dir_names)
        self.excluded_file_names = frozenset(excluded_file_names)

    def walk(self, root: Path) -> List[Path]:
        return walk(root, self.excluded_dir_names, self.excluded_file_names)
