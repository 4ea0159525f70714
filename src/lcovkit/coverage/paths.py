"""SF path canonicalization.

Coverage producers disagree on how they spell source paths: Istanbul and
Karma emit project-relative paths, others emit absolute ones, sometimes
through symlinked checkouts. Every SF path is turned into one canonical
absolute path so the same file always lands under the same report key.
"""

import os
from pathlib import Path

from lcovkit.core.errors import PathResolutionError


def resolve_path(base_dir: Path | str, raw_path: str, *, strict: bool = True) -> str:
    """Canonical absolute path for an SF entry.

    Relative paths are taken relative to base_dir. The result has `.`/`..`
    and symlinks resolved.

    Args:
        base_dir: Directory relative paths are joined to.
        raw_path: Path exactly as written after ``SF:``.
        strict: Require the file to exist. When False, missing paths are
            normalized lexically after resolving the longest existing prefix.

    Raises:
        PathResolutionError: Empty path, missing file (strict), or OS error.
    """
    if not raw_path:
        raise PathResolutionError.for_path(raw_path, "empty path")

    path = Path(raw_path)
    if not path.is_absolute():
        path = Path(base_dir) / path

    try:
        resolved = path.resolve(strict=strict)
    except FileNotFoundError:
        raise PathResolutionError.for_path(raw_path, f"no such file: {path}") from None
    except (OSError, RuntimeError) as e:
        # RuntimeError: symlink loop on older interpreters
        raise PathResolutionError.for_path(raw_path, str(e)) from e

    return os.path.normcase(str(resolved))
