from __future__ import annotations

import logging

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging to stderr at ``level`` (e.g. "INFO", "DEBUG")."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=FORMAT,
        force=True,
    )
    # httpx logs every request at INFO; keep it for DEBUG runs only
    logging.getLogger("httpx").setLevel(logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING)
