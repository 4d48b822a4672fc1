"""Issue records and fatal errors raised while building the registry."""
from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel


class RegistryIOError(RuntimeError):
    """Fatal filesystem failure: missing root or unwritable artifact."""


class MalformedManifest(BaseModel):
    kind: Literal["malformed_manifest"] = "malformed_manifest"
    path: str
    cause: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.cause}"


class MissingField(BaseModel):
    kind: Literal["missing_field"] = "missing_field"
    path: str
    field: str

    @property
    def message(self) -> str:
        if self.field == "files":
            return f"{self.path}: missing or empty 'files' array"
        return f"{self.path}: missing '{self.field}' field"


class FileNotFound(BaseModel):
    kind: Literal["file_not_found"] = "file_not_found"
    entry_name: str
    file_path: str

    @property
    def message(self) -> str:
        return f"{self.entry_name}: file not found: {self.file_path}"


class DuplicateName(BaseModel):
    kind: Literal["duplicate_name"] = "duplicate_name"
    name: str
    paths: list[str]

    @property
    def message(self) -> str:
        return f"{self.name}: declared by {len(self.paths)} manifests: {', '.join(self.paths)}"


class UnresolvedDependency(BaseModel):
    kind: Literal["unresolved_dependency"] = "unresolved_dependency"
    from_entry: str
    target: str

    @property
    def message(self) -> str:
        return f"{self.from_entry} depends on missing component: {self.target}"


Issue = Union[MalformedManifest, MissingField, FileNotFound, DuplicateName, UnresolvedDependency]
