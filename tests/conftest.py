"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local lcovkit package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project tree with a few TypeScript sources.

    tmp_path is resolved so expected keys match canonical paths on
    platforms where the temp dir sits behind a symlink.
    """
    root = tmp_path.resolve() / "proj"
    (root / "src").mkdir(parents=True)
    (root / "src" / "app.ts").write_text("const a = 1;\n\nexport function f() {\n  return a;\n}\n")
    (root / "src" / "util.ts").write_text("export const b = 2;\n")
    (root / "src" / "types.d.ts").write_text("declare const c: number;\n")
    (root / "a.ts").write_text("export {};\n")
    return root


@pytest.fixture
def write_trace(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write LCOV content to a trace file under tmp_path/traces."""
    traces = tmp_path.resolve() / "traces"
    traces.mkdir(exist_ok=True)

    def _write(name: str, content: str) -> Path:
        path = traces / name
        path.write_text(content)
        return path

    return _write
