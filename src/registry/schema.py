"""Pydantic models describing registry manifests and the aggregated catalog."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_URL = "https://ui.shadcn.com/schema/registry.json"


class _OpenModel(BaseModel):
    """Model keeping unknown keys and serialising only what the input declared."""

    model_config = ConfigDict(extra="allow")

    def as_record(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping with aliases and extension fields."""

        record: Dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            if name not in self.model_fields_set:
                continue
            value = getattr(self, name)
            if isinstance(value, list):
                value = [item.as_record() if isinstance(item, _OpenModel) else item for item in value]
            record[info.alias or name] = value
        record.update(self.model_extra or {})
        return record


class ManifestFile(_OpenModel):
    """One physical file shipped with a registry item."""

    path: str
    type: Optional[str] = None
    target: Optional[str] = None
    content: Optional[str] = None


class CatalogEntry(_OpenModel):
    """A single registry item parsed from an ``index.json`` manifest."""

    name: str
    type: str
    title: Optional[str] = None
    description: Optional[str] = None
    # null is accepted and written back as null
    dependencies: Optional[List[str]] = None
    dev_dependencies: Optional[List[str]] = Field(default=None, alias="devDependencies")
    registry_dependencies: Optional[List[str]] = Field(default=None, alias="registryDependencies")
    files: List[ManifestFile] = Field(min_length=1)


class CatalogDocument(BaseModel):
    """The aggregated registry document written as the build artifact."""

    model_config = ConfigDict(populate_by_name=True)

    schema_ref: str = Field(default=SCHEMA_URL, alias="$schema")
    name: str
    homepage: str
    extends: Optional[str] = None
    items: List[CatalogEntry] = Field(default_factory=list)

    def as_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "$schema": self.schema_ref,
            "name": self.name,
            "homepage": self.homepage,
        }
        if self.extends is not None:
            record["extends"] = self.extends
        record["items"] = [item.as_record() for item in self.items]
        return record


class CatalogStats(BaseModel):
    """Entry counts of a catalog, grouped by item type."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    by_kind: Dict[str, int] = Field(default_factory=dict, alias="byKind")

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntry]) -> "CatalogStats":
        entries_list = list(entries)
        counts: Dict[str, int] = {}
        for entry in entries_list:
            counts[entry.type] = counts.get(entry.type, 0) + 1
        return cls(total=len(entries_list), by_kind=dict(sorted(counts.items())))
