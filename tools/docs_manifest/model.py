from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from .config import LIST_FIELDS, MANIFEST_VERSION, SCHEMA_REF
from .utils import iso_midnight


@dataclass
class BuildContext:
    """
    Everything one build run needs, created once in ``main.build`` and
    handed to every stage. ``generated_at`` is captured at construction so
    the whole manifest carries a single build timestamp.
    """

    content_root: pathlib.Path
    output_path: pathlib.Path
    generated_at: str
    version: str = MANIFEST_VERSION
    schema: str = SCHEMA_REF
    sort_docs: bool = False

    @classmethod
    def create(
        cls,
        content_root: pathlib.Path,
        output_path: pathlib.Path,
        sort_docs: bool = False,
        now: Optional[datetime] = None,
    ) -> "BuildContext":
        now = now or datetime.now(timezone.utc)
        stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return cls(
            content_root=pathlib.Path(content_root),
            output_path=pathlib.Path(output_path),
            generated_at=stamp.replace("+00:00", "Z"),
            sort_docs=sort_docs,
        )


@dataclass
class DocMeta:
    """What the author wrote, with every field optional.

    ``None`` means the key was absent or had a type we cannot use.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    primary_category: Optional[str] = None
    categories: Optional[List[Any]] = None
    audience_levels: Optional[List[Any]] = None
    personas: Optional[List[Any]] = None
    tags: Optional[List[Any]] = None
    related_project_types: Optional[List[Any]] = None
    search_keywords: Optional[List[Any]] = None
    related: Optional[List[Any]] = None
    min_read_minutes: Any = None
    last_reviewed: Any = None

    @classmethod
    def from_frontmatter(cls, fm: Dict[str, Any]) -> "DocMeta":
        def _text(key):
            v = fm.get(key)
            if isinstance(v, bool):
                return None
            if isinstance(v, (int, float)):
                return str(v)
            return v if isinstance(v, str) else None

        def _list(*keys):
            for key in keys:
                v = fm.get(key)
                if isinstance(v, list):
                    return v
            return None

        return cls(
            title=_text("title"),
            description=_text("description"),
            primary_category=_text("primary_category"),
            categories=_list("categories"),
            audience_levels=_list("audience_levels"),
            personas=_list("personas"),
            tags=_list("tags"),
            related_project_types=_list(
                "related_project_types", "relatedProjectTypes"
            ),
            search_keywords=_list("search_keywords"),
            related=_list("related"),
            min_read_minutes=fm.get("min_read_minutes"),
            last_reviewed=fm.get("last_reviewed"),
        )


@dataclass
class ManifestEntry:
    path: str
    slug: str
    category: str
    title: str
    description: Optional[str] = None
    audience_levels: List[Any] = field(default_factory=list)
    personas: List[Any] = field(default_factory=list)
    categories: List[Any] = field(default_factory=list)
    tags: List[Any] = field(default_factory=list)
    related_project_types: List[Any] = field(default_factory=list)
    search_keywords: List[Any] = field(default_factory=list)
    related: List[Any] = field(default_factory=list)
    min_read_minutes: Optional[int] = None
    last_updated: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "path": self.path,
            "slug": self.slug,
            "category": self.category,
            "title": self.title,
        }
        if self.description is not None:
            out["description"] = self.description
        for fm_key, out_key in LIST_FIELDS:
            out[out_key] = list(getattr(self, fm_key))
        if self.min_read_minutes is not None:
            out["min_read_minutes"] = self.min_read_minutes
        if self.last_updated is not None:
            out["lastUpdated"] = iso_midnight(self.last_updated)
        return out
