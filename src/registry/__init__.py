"""Registry package: build an indexed catalog from component manifests."""

from .builder import BuildConfig, BuildReport, BuildState, RegistryBuilder
from .errors import RegistryIOError
from .schema import CatalogDocument, CatalogEntry, CatalogStats, ManifestFile

__all__ = [
    "BuildConfig",
    "BuildReport",
    "BuildState",
    "RegistryBuilder",
    "RegistryIOError",
    "CatalogDocument",
    "CatalogEntry",
    "CatalogStats",
    "ManifestFile",
]
