"""Ordering, assembly and atomic persistence of the catalog document."""
from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from utils.logging import get_logger

from .errors import RegistryIOError
from .schema import CatalogDocument, CatalogEntry

LOGGER = get_logger(__name__)


def _artifact_mode(output_path: Path) -> int:
    """Mode of the artifact being replaced, or the umask default for a new file."""

    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def sort_entries(entries: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Order entries by the UTF-8 bytes of their name; ties keep input order."""

    return sorted(entries, key=lambda entry: entry.name.encode("utf-8"))


def assemble_document(
    entries: Iterable[CatalogEntry],
    name: str,
    homepage: str,
    extends: Optional[str] = None,
) -> CatalogDocument:
    return CatalogDocument(name=name, homepage=homepage, extends=extends, items=sort_entries(entries))


def render_document(document: CatalogDocument) -> str:
    """Serialise ``document`` the same way every time for identical input."""

    return json.dumps(document.as_record(), indent=2, ensure_ascii=False) + "\n"


def write_document(document: CatalogDocument, output_path: Path) -> Path:
    """Atomically replace ``output_path`` with the rendered document.

    The document is written to a sibling temporary file and renamed over the
    target, so a failed write never leaves a partial artifact behind.
    """

    output_path = Path(output_path)
    payload = render_document(document)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(payload)
            os.chmod(tmp_name, _artifact_mode(output_path))
            Path(tmp_name).replace(output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise RegistryIOError(f"Failed to write {output_path}: {exc}") from exc
    LOGGER.info("Wrote %d items to %s", len(document.items), output_path)
    return output_path
