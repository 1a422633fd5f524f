from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .utils import ensure_dir

LOGGER_NAME = "trackcodec"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> tuple[logging.Logger, Optional[Path]]:
    """Initialize logging to console and, optionally, to a file.

    Only the CLI calls this; the library itself never installs handlers.
    Returns (logger, log_file_path or None)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ch_fmt = logging.Formatter("%(levelname)s | %(message)s")
    ch.setFormatter(ch_fmt)
    logger.addHandler(ch)

    log_path: Optional[Path] = None
    if log_file:
        log_path = Path(log_file)
        ensure_dir(log_path.parent)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh_fmt = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        fh.setFormatter(fh_fmt)
        logger.addHandler(fh)

    logger.debug("Logging initialized")
    return logger, log_path
