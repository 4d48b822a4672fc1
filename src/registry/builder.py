"""Single-pass registry build: scan, validate, resolve, aggregate, report."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from utils.config import DEFAULT_HOMEPAGE, AppConfig
from utils.logging import get_logger
from utils.paths import posix_relative

from .errors import DuplicateName, Issue
from .resolver import find_unresolved, resolve_entries
from .scanner import DEFAULT_EXCLUDE_DIRS, MANIFEST_FILENAME, discover_manifests
from .schema import CatalogDocument, CatalogEntry, CatalogStats
from .validator import validate_manifests
from .writer import assemble_document, write_document

LOGGER = get_logger(__name__)


class BuildState(str, Enum):
    WRITTEN = "written"
    VALIDATED = "validated"
    ABORTED = "aborted"


@dataclass(slots=True)
class BuildConfig:
    """Parameters of one build invocation.

    ``strict`` selects the failure policy: when set, missing files and
    duplicate names abort the build; otherwise the offending manifests are
    reported as warnings (entries with missing files are left out, duplicates
    are kept). ``closed_catalog`` additionally turns unresolved registry
    dependencies into errors.
    """

    project_root: Path
    manifest_dir: Path = Path("registry")
    manifest_filename: str = MANIFEST_FILENAME
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS
    output_path: Path = Path("registry.json")
    name: str = "registry"
    homepage: str = DEFAULT_HOMEPAGE
    base_url: Optional[str] = None
    extends: Optional[str] = None
    strict: bool = True
    closed_catalog: bool = False
    workers: int = 1
    write: bool = True

    def __post_init__(self) -> None:
        self.project_root = Path(self.project_root).resolve()
        self.manifest_dir = self.project_root / self.manifest_dir
        self.output_path = self.project_root / self.output_path
        self.homepage = self.homepage.rstrip("/")
        if self.base_url is None:
            self.base_url = self.homepage
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

    @classmethod
    def from_app_config(cls, config: AppConfig, project_root: Path, **overrides: Any) -> "BuildConfig":
        values: Dict[str, Any] = {
            "project_root": project_root,
            "manifest_dir": config.manifest_dir,
            "manifest_filename": config.manifest_filename,
            "exclude_dirs": tuple(config.exclude_dirs),
            "output_path": config.output_path,
            "name": config.name,
            "homepage": config.homepage,
            "base_url": config.base_url,
            "extends": config.extends,
            "strict": config.strict,
            "closed_catalog": config.closed_catalog,
            "workers": config.workers,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


@dataclass(slots=True)
class BuildReport:
    """What one build produced and every problem it found."""

    state: BuildState
    stats: CatalogStats
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)
    document: Optional[CatalogDocument] = None
    output_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.state is not BuildState.ABORTED

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def _find_duplicates(accepted: List[Tuple[str, CatalogEntry]]) -> List[DuplicateName]:
    by_name: Dict[str, List[str]] = defaultdict(list)
    for display, entry in accepted:
        by_name[entry.name].append(display)
    return [
        DuplicateName(name=name, paths=paths)
        for name, paths in sorted(by_name.items())
        if len(paths) > 1
    ]


class RegistryBuilder:
    """Run the registry pipeline once per :meth:`build` call."""

    def build(self, config: BuildConfig) -> BuildReport:
        manifests = discover_manifests(config.manifest_dir, config.manifest_filename, config.exclude_dirs)
        results = validate_manifests(manifests, config.project_root, config.workers)

        errors: List[Issue] = []
        warnings: List[Issue] = []
        accepted: List[Tuple[str, CatalogEntry]] = []
        for result in results:
            if result.structural is not None:
                errors.append(result.structural)
                continue
            assert result.entry is not None
            if result.missing_files:
                if config.strict:
                    errors.extend(result.missing_files)
                else:
                    warnings.extend(result.missing_files)
                    continue
            accepted.append((posix_relative(result.manifest_path, config.project_root), result.entry))

        duplicates = _find_duplicates(accepted)
        (errors if config.strict else warnings).extend(duplicates)

        entries = resolve_entries([entry for _, entry in accepted], config.base_url or config.homepage)
        unresolved = find_unresolved(entries)
        (errors if config.closed_catalog else warnings).extend(unresolved)

        stats = CatalogStats.from_entries(entries)
        if errors:
            LOGGER.error("Build aborted with %d error(s)", len(errors))
            return BuildReport(state=BuildState.ABORTED, stats=stats, errors=errors, warnings=warnings)

        document = assemble_document(entries, config.name, config.homepage, config.extends)
        if not config.write:
            return BuildReport(state=BuildState.VALIDATED, stats=stats, warnings=warnings, document=document)

        output_path = write_document(document, config.output_path)
        return BuildReport(
            state=BuildState.WRITTEN,
            stats=stats,
            warnings=warnings,
            document=document,
            output_path=output_path,
        )
