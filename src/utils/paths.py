"""Path utility helpers."""
from __future__ import annotations

from pathlib import Path


def normalise_path(path: Path) -> Path:
    """Return a normalised path handling Windows drive casing."""

    return Path(str(path).replace("\\", "/")).expanduser().resolve()


def posix_relative(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes, or as-is if outside."""

    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
