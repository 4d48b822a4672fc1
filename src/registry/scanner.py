"""Filesystem discovery of registry item manifests."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Set

from utils.logging import get_logger

from .errors import RegistryIOError

LOGGER = get_logger(__name__)

MANIFEST_FILENAME = "index.json"
DEFAULT_EXCLUDE_DIRS = ("node_modules",)


def discover_manifests(
    root: Path,
    filename: str = MANIFEST_FILENAME,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> Set[Path]:
    """Return absolute paths of every ``filename`` found below ``root`` at any depth.

    Directories named in ``exclude_dirs`` are pruned from the walk. The result
    carries no order; callers sort it.
    """

    root = Path(root)
    if not root.is_dir():
        raise RegistryIOError(f"Manifest root {root} does not exist")
    root = root.resolve()
    excluded = set(exclude_dirs)

    def on_walk_error(err: OSError) -> None:
        LOGGER.warning("Error walking directory %s: %s", err.filename, err)

    found: Set[Path] = set()
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        if filename in filenames:
            found.add(Path(dirpath) / filename)
    LOGGER.info("Found %d component definitions under %s", len(found), root)
    return found
