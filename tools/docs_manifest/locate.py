from __future__ import annotations

import pathlib
from typing import List

from .config import DOC_SUFFIXES


def _is_hidden(rel: pathlib.Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)


def find_documents(root: pathlib.Path) -> List[pathlib.Path]:
    """
    Every .md/.mdx file under ``root``, in traversal order.

    Dotfiles and anything inside a dot-directory are skipped. A missing
    root is fatal; an empty result is not.
    """
    root = pathlib.Path(root)
    if not root.exists():
        raise FileNotFoundError(f"content root not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"content root is not a directory: {root}")

    found: List[pathlib.Path] = []
    for p in root.rglob("*"):
        if p.suffix.lower() not in DOC_SUFFIXES:
            continue
        if _is_hidden(p.relative_to(root)) or not p.is_file():
            continue
        found.append(p)
    return found
