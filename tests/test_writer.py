from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from registry.errors import RegistryIOError
from registry.schema import SCHEMA_URL, CatalogEntry, CatalogStats
from registry.writer import assemble_document, render_document, sort_entries, write_document


def _entry(name: str, kind: str = "registry:ui", **extra) -> CatalogEntry:
    return CatalogEntry.model_validate({"name": name, "type": kind, "files": [{"path": f"{name}.tsx"}], **extra})


def test_sort_is_bytewise() -> None:
    entries = [_entry("button"), _entry("Badge"), _entry("accordion"), _entry("éclair")]
    assert [entry.name for entry in sort_entries(entries)] == ["Badge", "accordion", "button", "éclair"]


def test_sort_keeps_input_order_for_equal_names() -> None:
    first = _entry("shared", title="first")
    second = _entry("shared", title="second")
    assert [entry.title for entry in sort_entries([first, second])] == ["first", "second"]


def test_document_layout() -> None:
    document = assemble_document([_entry("tabs"), _entry("button")], "acme", "https://acme.dev", extends="none")
    record = json.loads(render_document(document))

    assert list(record) == ["$schema", "name", "homepage", "extends", "items"]
    assert record["$schema"] == SCHEMA_URL
    assert [item["name"] for item in record["items"]] == ["button", "tabs"]


def test_extends_is_omitted_when_unset() -> None:
    record = json.loads(render_document(assemble_document([_entry("tabs")], "acme", "https://acme.dev")))
    assert "extends" not in record


def test_extension_fields_round_trip() -> None:
    entry = _entry("tabs", foo="bar", cssVars={"light": {"radius": "0.5rem"}})
    item = json.loads(render_document(assemble_document([entry], "acme", "https://acme.dev")))["items"][0]

    assert item["foo"] == "bar"
    assert item["cssVars"] == {"light": {"radius": "0.5rem"}}
    assert "dependencies" not in item
    assert item["files"] == [{"path": "tabs.tsx"}]


def test_render_is_deterministic() -> None:
    entries = [_entry("b", meta={"z": 1, "a": 2}), _entry("a")]
    first = render_document(assemble_document(entries, "acme", "https://acme.dev"))
    second = render_document(assemble_document(list(reversed(entries)), "acme", "https://acme.dev"))
    assert first == second
    assert first.endswith("}\n")


def test_write_replaces_existing_artifact(tmp_path: Path) -> None:
    output = tmp_path / "public" / "registry.json"
    output.parent.mkdir()
    output.write_text("stale", encoding="utf-8")

    write_document(assemble_document([_entry("tabs")], "acme", "https://acme.dev"), output)

    assert json.loads(output.read_text(encoding="utf-8"))["items"][0]["name"] == "tabs"
    assert [path.name for path in output.parent.iterdir()] == ["registry.json"]


def test_write_failure_is_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(RegistryIOError):
        write_document(assemble_document([_entry("tabs")], "acme", "https://acme.dev"), blocker / "registry.json")


def test_stats_group_by_kind() -> None:
    stats = CatalogStats.from_entries(
        [_entry("a"), _entry("b", kind="registry:hook"), _entry("c"), _entry("d", kind="registry:block")]
    )
    assert stats.total == 4
    assert stats.by_kind == {"registry:block": 1, "registry:hook": 1, "registry:ui": 2}
    assert stats.model_dump(by_alias=True)["byKind"]["registry:ui"] == 2


def test_snake_case_keys_are_extension_fields() -> None:
    entry = _entry("tabs", dev_dependencies=["x"], registry_dependencies=["nope"])
    item = json.loads(render_document(assemble_document([entry], "acme", "https://acme.dev")))["items"][0]

    assert item["dev_dependencies"] == ["x"]
    assert item["registry_dependencies"] == ["nope"]
    assert "devDependencies" not in item
    assert "registryDependencies" not in item


def test_write_keeps_mode_of_replaced_artifact(tmp_path: Path) -> None:
    output = tmp_path / "registry.json"
    output.write_text("{}", encoding="utf-8")
    output.chmod(0o644)

    write_document(assemble_document([_entry("tabs")], "acme", "https://acme.dev"), output)

    assert stat.S_IMODE(output.stat().st_mode) == 0o644


def test_new_artifact_follows_umask(tmp_path: Path) -> None:
    output = tmp_path / "registry.json"
    umask = os.umask(0o022)
    try:
        write_document(assemble_document([_entry("tabs")], "acme", "https://acme.dev"), output)
    finally:
        os.umask(umask)

    assert stat.S_IMODE(output.stat().st_mode) == 0o644
