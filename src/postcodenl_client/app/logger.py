from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Log to stderr; stdout belongs to the MCP stdio transport."""
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=level, format=_FORMAT, stream=sys.stderr)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
