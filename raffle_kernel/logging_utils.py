"""
Shared logging setup.

`get_logger(name)` configures the root logger once (console handler plus an
optional file handler) from the LOG_LEVEL and LOG_FILE environment variables
and returns a named logger that inherits it. `configure_logging` reapplies
the setup with explicit values; the API factory calls it with its Settings.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False
_handlers: List[logging.Handler] = []


def configure_logging(level_name: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install our handlers on the root logger, replacing any from a prior call."""
    global _configured

    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    root.setLevel(level)
    formatter = logging.Formatter(_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)
    _handlers.append(console)

    if log_file:
        try:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            _handlers.append(file_handler)
        except OSError:
            root.exception("Failed to create file log handler; continuing with console only")

    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger for `name`, configuring logging on first use."""
    if not _configured:
        configure_logging(os.getenv("LOG_LEVEL", "INFO"), os.getenv("LOG_FILE") or None)
    return logging.getLogger(name)
