from __future__ import annotations

import hashlib
import json
import os
import pathlib
import stat
import tempfile
from datetime import date, datetime
from typing import Any, Dict, List

from .config import HASH_LENGTH
from .model import BuildContext, ManifestEntry


def _json_default(v: Any):
    # YAML hands back native dates inside free-form lists
    if isinstance(v, (date, datetime)):
        return v.isoformat()
    raise TypeError(f"Object of type {type(v).__name__} is not JSON serializable")


def canonical_json(docs: List[Dict[str, Any]]) -> str:
    return json.dumps(
        docs,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )


def docs_hash(docs: List[Dict[str, Any]]) -> str:
    """Fingerprint of the docs array only; build-time fields stay out."""
    digest = hashlib.sha256(canonical_json(docs).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def assemble_manifest(
    ctx: BuildContext,
    entries: List[ManifestEntry],
) -> Dict[str, Any]:
    if ctx.sort_docs:
        entries = sorted(entries, key=lambda e: e.slug)
    docs = [e.to_dict() for e in entries]
    return {
        "$schema": ctx.schema,
        "version": ctx.version,
        "generated_at": ctx.generated_at,
        "hash": docs_hash(docs),
        "docs": docs,
    }


def _target_mode(path: pathlib.Path) -> int:
    # mkstemp creates 0600; keep the old file's mode or follow the umask
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_manifest(manifest: Dict[str, Any], path: pathlib.Path) -> None:
    """
    Write ``manifest`` as JSON to ``path`` atomically: a temp file in the
    same directory is fully written and fsynced, then renamed over the
    target. A failed write leaves any previous file as it was.
    """
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    tmp = pathlib.Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(
                manifest,
                f,
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
                default=_json_default,
            )
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
