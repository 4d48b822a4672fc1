from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for extra in (PROJECT_ROOT / "src", PROJECT_ROOT / "cli"):
    if str(extra) not in sys.path:
        sys.path.insert(0, str(extra))


@pytest.fixture(autouse=True)
def _configure_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REGISTRY_URL", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


WriteManifest = Callable[..., Path]


@pytest.fixture
def write_manifest(tmp_path: Path) -> WriteManifest:
    """Create ``registry/<folder>/index.json`` under ``tmp_path``.

    Files declared in the manifest are created unless ``create_files`` is false.
    """

    def _write(
        folder: str,
        manifest: Optional[Dict[str, Any]] = None,
        raw: Optional[str] = None,
        create_files: bool = True,
    ) -> Path:
        directory = tmp_path / "registry" / folder
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "index.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
            return path
        assert manifest is not None
        if create_files:
            for item in manifest.get("files") or []:
                target = tmp_path / item["path"]
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("export {}\n", encoding="utf-8")
        path.write_text(json.dumps(manifest), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_manifest() -> Callable[..., Dict[str, Any]]:
    """Return a builder of valid manifests whose single file lives under registry/ui."""

    def _make(name: str, kind: str = "registry:ui", **extra: Any) -> Dict[str, Any]:
        manifest: Dict[str, Any] = {
            "name": name,
            "type": kind,
            "files": [{"path": f"registry/ui/{name}/index.tsx", "type": kind}],
        }
        manifest.update(extra)
        return manifest

    return _make
