from __future__ import annotations

import pathlib
import sys
from typing import List, Optional, Tuple

import yaml

from .manifest import canonical_json
from .model import BuildContext, DocMeta, ManifestEntry
from .normalize import normalize_entry
from .utils import parse_frontmatter


def read_document(path: pathlib.Path) -> Tuple[Optional[DocMeta], str]:
    """
    Returns (meta, "") for a parsable document, or (None, reason) when the
    file cannot be used. The body is dropped here.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return None, f"not valid UTF-8 ({e.reason})"

    try:
        fm, _ = parse_frontmatter(text)
    except yaml.YAMLError as e:
        problem = getattr(e, "problem", None) or type(e).__name__
        return None, f"malformed frontmatter ({problem})"

    if fm is None:
        return DocMeta(), ""
    return DocMeta.from_frontmatter(fm), ""


def _unserializable(entry: ManifestEntry) -> str:
    # verbatim lists can hold YAML values JSON cannot carry (NaN, sets, date keys)
    try:
        canonical_json([entry.to_dict()])
    except (TypeError, ValueError) as e:
        return f"unserializable frontmatter ({e})"
    return ""


def collect_entries(
    ctx: BuildContext,
    paths: List[pathlib.Path],
) -> Tuple[List[ManifestEntry], List[Tuple[pathlib.Path, str]]]:
    entries: List[ManifestEntry] = []
    skipped: List[Tuple[pathlib.Path, str]] = []

    for p in paths:
        rel = p.relative_to(ctx.content_root)
        meta, reason = read_document(p)
        entry = None
        if meta is not None and not (meta.title or "").strip():
            reason = "missing frontmatter title"
        elif meta is not None:
            entry = normalize_entry(meta, rel)
            reason = _unserializable(entry)
        if reason:
            print(f"! skipping {rel.as_posix()}: {reason}", file=sys.stderr)
            skipped.append((p, reason))
            continue
        entries.append(entry)

    return entries, skipped
