"""Rewriting and closure checking of ``registryDependencies`` references."""
from __future__ import annotations

from typing import Iterable, List

from utils.logging import get_logger

from .errors import UnresolvedDependency
from .schema import CatalogEntry

LOGGER = get_logger(__name__)

URL_SCHEMES = ("http://", "https://")
ITEM_SUBPATH = "r"
ITEM_SUFFIX = ".json"


def is_absolute_url(reference: str) -> bool:
    return reference.startswith(URL_SCHEMES)


def resolve_reference(reference: str, base_url: str) -> str:
    """Turn a bare item name into ``<base_url>/r/<name>.json``; URLs pass through."""

    if is_absolute_url(reference):
        return reference
    return f"{base_url.rstrip('/')}/{ITEM_SUBPATH}/{reference}{ITEM_SUFFIX}"


def bare_name(reference: str) -> str:
    """Recover the item name a reference points at."""

    if not is_absolute_url(reference):
        return reference
    last = reference.split("?", 1)[0].split("#", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if last.endswith(ITEM_SUFFIX):
        last = last[: -len(ITEM_SUFFIX)]
    return last


def resolve_entries(entries: Iterable[CatalogEntry], base_url: str) -> List[CatalogEntry]:
    """Return copies of ``entries`` with every registry dependency made addressable."""

    resolved: List[CatalogEntry] = []
    for entry in entries:
        if not entry.registry_dependencies:
            resolved.append(entry)
            continue
        references = [resolve_reference(ref, base_url) for ref in entry.registry_dependencies]
        LOGGER.debug("%s depends on: %s", entry.name, ", ".join(entry.registry_dependencies))
        resolved.append(entry.model_copy(update={"registry_dependencies": references}))
    return resolved


def find_unresolved(entries: Iterable[CatalogEntry]) -> List[UnresolvedDependency]:
    """List every dependency whose target is not an item of ``entries``."""

    entries_list = list(entries)
    known = {entry.name for entry in entries_list}
    unresolved: List[UnresolvedDependency] = []
    for entry in entries_list:
        for reference in entry.registry_dependencies or ():
            if bare_name(reference) not in known:
                unresolved.append(UnresolvedDependency(from_entry=entry.name, target=reference))
    return unresolved
