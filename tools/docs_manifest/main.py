#!/usr/bin/env python3
"""
Docs manifest builder.

Scans the docs tree for .md/.mdx files, reads their YAML frontmatter and
writes manifest.json for the docs site:

- one entry per document with a title, in discovery order
  (MANIFEST_SORT=1 orders by slug instead)
- list fields always present, optional fields omitted when unknown
- category from primary_category / categories[0] / top folder
- `hash`: short sha256 over the docs array, used by the site to decide
  whether prerendered pages need revalidation
- written via temp file + rename, so a failed build never leaves a
  half-written manifest behind

Usage: python -m docs_manifest.main [CONTENT_ROOT [OUTPUT]]
(or DOCS_ROOT / MANIFEST_OUT in the environment)
"""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Any, Dict, List, Optional

from .collect import collect_entries
from .config import (
    DOCS_DIR,
    ENV_DOCS_ROOT,
    ENV_MANIFEST_OUT,
    ENV_MANIFEST_SORT,
    MANIFEST_PATH,
)
from .locate import find_documents
from .manifest import assemble_manifest, write_manifest
from .model import BuildContext


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def build(ctx: BuildContext) -> Dict[str, Any]:
    paths = find_documents(ctx.content_root)
    if not paths:
        print(f"! no documents found under {ctx.content_root}", file=sys.stderr)

    entries, skipped = collect_entries(ctx, paths)
    if skipped:
        print(f"- skipped {len(skipped)} of {len(paths)} documents")
    if paths and not entries:
        print(
            f"! no usable documents under {ctx.content_root}, manifest is empty",
            file=sys.stderr,
        )

    manifest = assemble_manifest(ctx, entries)
    write_manifest(manifest, ctx.output_path)
    print(
        f"✓ manifest built with hash: {manifest['hash']} and "
        f"{len(manifest['docs'])} docs -> {ctx.output_path}"
    )
    return manifest


def main(argv: Optional[List[str]] = None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 2:
        print(
            "usage: build-docs-manifest [CONTENT_ROOT [OUTPUT]]",
            file=sys.stderr,
        )
        sys.exit(2)

    content_root = pathlib.Path(
        args[0] if args else os.environ.get(ENV_DOCS_ROOT) or DOCS_DIR
    )
    output_path = pathlib.Path(
        args[1] if len(args) > 1 else os.environ.get(ENV_MANIFEST_OUT) or MANIFEST_PATH
    )

    ctx = BuildContext.create(
        content_root, output_path, sort_docs=_env_flag(ENV_MANIFEST_SORT)
    )
    try:
        build(ctx)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
