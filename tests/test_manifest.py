import json
import os
import stat
from datetime import date, datetime, timezone

import pytest

from docs_manifest import manifest as manifest_mod
from docs_manifest.manifest import (
    assemble_manifest,
    canonical_json,
    docs_hash,
    write_manifest,
)
from docs_manifest.model import BuildContext, ManifestEntry


def _entry(slug, title="T", **kw):
    return ManifestEntry(path=f"/{slug}.md", slug=slug, category="c", title=title, **kw)


def _ctx(tmp_path, **kw):
    return BuildContext.create(
        tmp_path / "docs",
        tmp_path / "manifest.json",
        now=datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc),
        **kw,
    )


def test_canonical_json_ignores_key_order():
    a = [{"title": "x", "slug": "y"}]
    b = [{"slug": "y", "title": "x"}]
    assert canonical_json(a) == canonical_json(b)


def test_canonical_json_renders_dates_in_lists():
    assert canonical_json([{"related": [date(2025, 1, 2)]}]) == '[{"related":["2025-01-02"]}]'


def test_canonical_json_rejects_unknown_types():
    with pytest.raises(TypeError):
        canonical_json([{"x": object()}])


def test_docs_hash_is_short_hex_and_content_sensitive():
    h = docs_hash([_entry("a").to_dict()])
    assert len(h) == 16
    int(h, 16)
    assert h == docs_hash([_entry("a").to_dict()])
    assert h != docs_hash([_entry("a", title="Other").to_dict()])
    assert docs_hash([]) != h


def test_assemble_stamps_context_fields(tmp_path):
    ctx = _ctx(tmp_path)
    out = assemble_manifest(ctx, [_entry("b"), _entry("a")])
    assert list(out) == ["$schema", "version", "generated_at", "hash", "docs"]
    assert out["$schema"] == "./tools/schemas/manifest.schema.json"
    assert out["version"] == "2025.10.0"
    assert out["generated_at"] == "2025-03-01T12:00:00.000Z"
    assert [d["slug"] for d in out["docs"]] == ["b", "a"]
    assert out["hash"] == docs_hash(out["docs"])


def test_hash_ignores_build_time(tmp_path):
    early = assemble_manifest(_ctx(tmp_path), [_entry("a")])
    late = assemble_manifest(
        BuildContext.create(tmp_path, tmp_path / "m.json"), [_entry("a")]
    )
    assert early["generated_at"] != late["generated_at"]
    assert early["hash"] == late["hash"]


def test_sort_docs_orders_by_slug(tmp_path):
    out = assemble_manifest(_ctx(tmp_path, sort_docs=True), [_entry("b"), _entry("a")])
    assert [d["slug"] for d in out["docs"]] == ["a", "b"]


def test_write_manifest_creates_parent_and_writes_json(tmp_path):
    target = tmp_path / "out" / "manifest.json"
    write_manifest({"hash": "abc", "docs": []}, target)
    assert json.loads(target.read_text(encoding="utf-8")) == {"hash": "abc", "docs": []}
    assert target.read_text(encoding="utf-8").endswith("\n")
    assert list(target.parent.iterdir()) == [target]


def test_failed_serialization_keeps_previous_manifest(tmp_path):
    target = tmp_path / "manifest.json"
    target.write_text('{"hash": "old"}\n', encoding="utf-8")

    broken = {"hash": "new", "docs": [{"title": "x"} for _ in range(50)] + [{"bad": object()}]}
    with pytest.raises(TypeError):
        write_manifest(broken, target)

    assert target.read_text(encoding="utf-8") == '{"hash": "old"}\n'
    assert list(tmp_path.iterdir()) == [target]


def test_failed_rename_keeps_previous_manifest(tmp_path, monkeypatch):
    target = tmp_path / "manifest.json"
    target.write_text('{"hash": "old"}\n', encoding="utf-8")

    def _boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(manifest_mod.os, "replace", _boom)
    with pytest.raises(OSError, match="disk full"):
        write_manifest({"hash": "new", "docs": []}, target)

    assert target.read_text(encoding="utf-8") == '{"hash": "old"}\n'
    assert list(tmp_path.iterdir()) == [target]


def test_canonical_json_rejects_nan():
    with pytest.raises(ValueError):
        canonical_json([{"tags": [float("nan")]}])


def test_write_manifest_rejects_nan_and_keeps_previous(tmp_path):
    target = tmp_path / "manifest.json"
    target.write_text('{"hash": "old"}\n', encoding="utf-8")
    with pytest.raises(ValueError):
        write_manifest({"docs": [{"related": [float("inf")]}]}, target)
    assert target.read_text(encoding="utf-8") == '{"hash": "old"}\n'


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)


def test_new_manifest_follows_umask(tmp_path, umask_022):
    target = tmp_path / "manifest.json"
    write_manifest({"docs": []}, target)
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_rewrite_keeps_existing_mode(tmp_path, umask_022):
    target = tmp_path / "manifest.json"
    target.write_text("{}", encoding="utf-8")
    os.chmod(target, 0o640)
    write_manifest({"docs": []}, target)
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
