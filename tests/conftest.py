import sys
import textwrap
from pathlib import Path

import pytest

# Make tools/ importable so `docs_manifest` resolves without an install
TOOLS = Path(__file__).resolve().parents[1] / "tools"
if str(TOOLS) not in sys.path:
    sys.path.insert(0, str(TOOLS))


@pytest.fixture
def docs_tree(tmp_path):
    """Returns a writer: docs_tree({"a/b.md": "---\\ntitle: B\\n---\\n"}) -> root."""
    root = tmp_path / "docs"
    root.mkdir()

    def _write(files):
        for rel, text in files.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(textwrap.dedent(text), encoding="utf-8")
        return root

    return _write
