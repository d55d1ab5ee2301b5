from __future__ import annotations

import pathlib
from typing import Any, List, Optional

from .config import FALLBACK_CATEGORY
from .model import DocMeta, ManifestEntry
from .utils import coerce_date, slugify


def as_list(v: Any) -> List[Any]:
    return list(v) if isinstance(v, list) else []


def coerce_minutes(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return None


def derive_slug(rel_path: pathlib.PurePath) -> str:
    return pathlib.PurePosixPath(rel_path.as_posix()).with_suffix("").as_posix()


def derive_category(meta: DocMeta, rel_path: pathlib.PurePath) -> str:
    """
    primary_category, then categories[0], then the top-level folder, then
    "uncategorized". Whichever wins is slugified.
    """
    candidates: List[Any] = [meta.primary_category]
    if meta.categories:
        first = meta.categories[0]
        if isinstance(first, (int, float)) and not isinstance(first, bool):
            first = str(first)
        candidates.append(first)
    parts = pathlib.PurePosixPath(rel_path.as_posix()).parts
    if len(parts) > 1:
        candidates.append(parts[0])

    for c in candidates:
        if isinstance(c, str) and c:
            return slugify(c) or FALLBACK_CATEGORY
    return FALLBACK_CATEGORY


def normalize_entry(meta: DocMeta, rel_path: pathlib.PurePath) -> ManifestEntry:
    """Strict manifest entry for one document. Never raises."""
    return ManifestEntry(
        path="/" + rel_path.as_posix(),
        slug=derive_slug(rel_path),
        category=derive_category(meta, rel_path),
        title=meta.title or "",
        description=meta.description,
        audience_levels=as_list(meta.audience_levels),
        personas=as_list(meta.personas),
        categories=as_list(meta.categories),
        tags=as_list(meta.tags),
        related_project_types=as_list(meta.related_project_types),
        search_keywords=as_list(meta.search_keywords),
        related=as_list(meta.related),
        min_read_minutes=coerce_minutes(meta.min_read_minutes),
        last_updated=coerce_date(meta.last_reviewed),
    )
