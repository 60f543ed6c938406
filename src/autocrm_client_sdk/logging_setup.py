from __future__ import annotations

import logging


def configure_logging(level: int | str = logging.INFO) -> None:
    """Plain ``%(message)s`` output for scripts; the library never calls this itself."""
    logging.basicConfig(level=level, format="%(message)s")
