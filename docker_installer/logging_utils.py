from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
FILE_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class _BelowLevel(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
) -> Optional[str]:
    """Configure logging.

    Console output is split by severity: informational lines go to stdout,
    warnings and errors go to stderr. Both carry a timestamp.

    If log_path is given a detailed log file is written as well. When that
    location is not writable (e.g. /var/log as a regular user) we fall back to
    a file in the current working directory.

    Returns the actual file path being used, or None for console-only.
    """

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_docker_installer_configured", False):
        return getattr(root, "_docker_installer_log_path", log_path)

    console_fmt = logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
    handlers: list[logging.Handler] = []

    out = logging.StreamHandler(sys.stdout)
    out.setFormatter(console_fmt)
    out.addFilter(_BelowLevel(logging.WARNING))
    handlers.append(out)

    err = logging.StreamHandler(sys.stderr)
    err.setFormatter(console_fmt)
    err.setLevel(logging.WARNING)
    handlers.append(err)

    chosen_path: Optional[str] = None
    if log_path:
        file_fmt = logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATEFMT)
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            fallback = str(Path.cwd() / "docker-installer.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(file_fmt)
        handlers.append(file_handler)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_docker_installer_configured", True)
    setattr(root, "_docker_installer_log_path", chosen_path)

    if chosen_path:
        logging.getLogger(__name__).info(
            "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
        )
    return chosen_path
