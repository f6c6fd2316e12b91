"""Central logging configuration.

Usage:
    from audience_tagger.logging_setup import init_logging
    init_logging(verbose=True)  # once, at CLI start

Modules log through ``logging.getLogger(__name__)``; user-facing CLI output
is printed separately.
"""

import logging
from pathlib import Path
from typing import Optional

_INITIALIZED = False
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def init_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logging once. Safe to call multiple times.

    Args:
        verbose: Log DEBUG records instead of INFO
        log_file: Also write records to this file
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _INITIALIZED = True
