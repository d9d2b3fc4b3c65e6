"""
Logging setup shared by the CLI and the Streamlit front end.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG = logging.getLogger("resume_optimizer")

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configure console (and optional file) logging.

    Safe to call more than once: when handlers already exist (Streamlit
    reruns, pytest) their level is updated and no console handler is added.
    A file handler is added once per path.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    if root.handlers:
        for handler in root.handlers:
            handler.setLevel(level)
        root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=_FORMAT, handlers=[logging.StreamHandler()])

    if log_file and not _has_file_handler(root, log_file):
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(file_handler)

    # silence noisy PDF logging
    logging.getLogger("pdfplumber").setLevel(logging.ERROR)
    logging.getLogger("pdfminer").setLevel(logging.ERROR)


def _has_file_handler(logger: logging.Logger, path: str) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )
