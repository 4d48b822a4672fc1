"""Structural and filesystem validation of individual manifests."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from utils.logging import get_logger
from utils.parallel import map_in_threads
from utils.paths import posix_relative

from .errors import FileNotFound, MalformedManifest, MissingField
from .schema import CatalogEntry

LOGGER = get_logger(__name__)

# Checked in this order; the first failure excludes the manifest.
REQUIRED_FIELDS = ("name", "type", "files")


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating one manifest file."""

    manifest_path: Path
    entry: Optional[CatalogEntry] = None
    structural: Optional[Union[MalformedManifest, MissingField]] = None
    missing_files: List[FileNotFound] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.entry is not None and not self.missing_files


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _load_raw(path: Path) -> Dict[str, Any]:
    content = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(content, dict):
        raise ValueError(f"expected a JSON object, got {type(content).__name__}")
    return content


def validate_manifest(path: Path, project_root: Path) -> ValidationResult:
    """Validate the manifest at ``path``; declared files resolve against ``project_root``."""

    result = ValidationResult(manifest_path=path)
    display = posix_relative(path, project_root)

    try:
        raw = _load_raw(path)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        LOGGER.warning("Failed to process %s: %s", display, exc)
        result.structural = MalformedManifest(path=display, cause=str(exc))
        return result

    for name in REQUIRED_FIELDS:
        if not raw.get(name):
            result.structural = MissingField(path=display, field=name)
            return result

    try:
        entry = CatalogEntry.model_validate(raw)
    except ValidationError as exc:
        result.structural = MalformedManifest(path=display, cause=_format_validation_error(exc))
        return result

    for manifest_file in entry.files:
        if not (project_root / manifest_file.path).exists():
            result.missing_files.append(FileNotFound(entry_name=entry.name, file_path=manifest_file.path))

    result.entry = entry
    if result.missing_files:
        LOGGER.warning("%s declares %d missing file(s)", entry.name, len(result.missing_files))
    else:
        LOGGER.debug("Validated %s (%s)", entry.name, entry.type)
    return result


def validate_manifests(paths: Iterable[Path], project_root: Path, workers: int = 1) -> List[ValidationResult]:
    """Validate every manifest, returning results ordered by manifest path."""

    ordered = sorted(paths)
    return map_in_threads(partial(validate_manifest, project_root=project_root), ordered, workers)
