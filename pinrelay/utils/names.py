"""Filename helpers for outbound multipart parts."""

from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[\\/]+")

DEFAULT_PART_NAME = "file"


def safe_basename(filename: str | None) -> str:
    """Strip directory components from a client-supplied filename.

    Both POSIX and Windows separators are treated as directory separators,
    so ``"../../etc/passwd"`` and ``"C:\\docs\\a.pdf"`` become ``"passwd"``
    and ``"a.pdf"``. Names that reduce to nothing (``""``, ``"/"``, ``".."``)
    fall back to ``"file"``.
    """
    parts = [p for p in _SEPARATORS_RE.split(filename or "") if p]
    base = parts[-1].strip() if parts else ""
    if base in {"", ".", ".."}:
        return DEFAULT_PART_NAME
    return base
