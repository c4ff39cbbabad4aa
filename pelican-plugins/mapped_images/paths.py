from __future__ import annotations

from typing import Optional


def join_posix_path(base: Optional[str], rel: Optional[str]) -> str:
    """Join two URL path segments with exactly one ``/`` between them.

    When either side is empty the two are simply concatenated.
    """
    base = base or ''
    rel = rel or ''
    if not base or not rel:
        return base + rel
    if base.endswith('/'):
        base = base[:-1]
    if rel.startswith('/'):
        rel = rel[1:]
    return f"{base}/{rel}"
