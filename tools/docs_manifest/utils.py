from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import FENCE_LINES, ISO_DATE_RE, SLUG_RE


def slugify(s: str) -> str:
    return SLUG_RE.sub("-", s.lower()).strip("-")


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def coerce_date(v: Any) -> Optional[date]:
    """
    Accept a YAML-native date/datetime or a strict YYYY-MM-DD string.
    Anything else (free-form text, impossible dates, numbers) gives None.
    """
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        if not ISO_DATE_RE.fullmatch(v):
            return None
        try:
            return date.fromisoformat(v)
        except ValueError:
            return None
    return None


def iso_midnight(d: date) -> str:
    return f"{d.isoformat()}T00:00:00.000Z"


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Split ``text`` into (frontmatter, body).

    The block must open on the very first line with ``---`` and close on a
    line that is exactly ``---`` or ``...``. Returns ``(None, text)`` when
    there is no complete block or it does not hold a mapping. Malformed YAML
    raises ``yaml.YAMLError``.
    """
    text = _norm_text(text)
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != "---":
        return None, text

    for i in range(1, len(lines)):
        if lines[i].rstrip() in FENCE_LINES:
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            fm = yaml.safe_load(fm_text)
            if fm is None:
                fm = {}
            if not isinstance(fm, dict):
                return None, body
            return fm, body
    return None, text
