"""Configuration helpers for the registry builder."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_HOMEPAGE = "http://localhost:3000"
REGISTRY_URL_ENV = "REGISTRY_URL"


class AppConfig(BaseModel):
    """Application level configuration."""

    name: str = "registry"
    homepage: str = DEFAULT_HOMEPAGE
    registry_url: Optional[str] = None
    manifest_dir: Path = Field(default=Path("registry"))
    manifest_filename: str = "index.json"
    output_path: Path = Field(default=Path("registry.json"))
    exclude_dirs: List[str] = Field(default_factory=lambda: ["node_modules"])
    extends: Optional[str] = None
    strict: bool = True
    closed_catalog: bool = False
    workers: int = Field(default=1, ge=1)

    @field_validator("homepage", "registry_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    @property
    def base_url(self) -> str:
        """URL prefix used when rewriting registry dependencies."""

        return self.registry_url or self.homepage


def load_config(path: Path, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from a YAML file, then apply environment overrides."""

    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    env = os.environ if environ is None else environ
    if env.get(REGISTRY_URL_ENV):
        data["registry_url"] = env[REGISTRY_URL_ENV]
    return AppConfig(**data)
