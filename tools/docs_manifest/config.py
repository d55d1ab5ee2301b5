#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

def _repo_root(here: pathlib.Path) -> pathlib.Path:
    # tools/docs_manifest/ inside a checkout; otherwise (installed) use cwd
    root = here.resolve().parents[2]
    if (root / "tools" / "docs_manifest").is_dir():
        return root
    return pathlib.Path.cwd()


ROOT = _repo_root(pathlib.Path(__file__))
DOCS_DIR = ROOT / "docs"
MANIFEST_PATH = ROOT / "manifest.json"

# ---------- Config

MANIFEST_VERSION = "2025.10.0"
SCHEMA_REF = "./tools/schemas/manifest.schema.json"
DOC_SUFFIXES = (".md", ".mdx")
HASH_LENGTH = 16
FALLBACK_CATEGORY = "uncategorized"

# frontmatter key -> manifest key
LIST_FIELDS = (
    ("audience_levels", "audience_levels"),
    ("personas", "personas"),
    ("categories", "categories"),
    ("tags", "tags"),
    ("related_project_types", "relatedProjectTypes"),
    ("search_keywords", "search_keywords"),
    ("related", "related"),
)

ENV_DOCS_ROOT = "DOCS_ROOT"
ENV_MANIFEST_OUT = "MANIFEST_OUT"
ENV_MANIFEST_SORT = "MANIFEST_SORT"

# Some shared regexes

SLUG_RE = re.compile(r"[^a-z0-9]+")
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
FENCE_LINES = ("---", "...")
