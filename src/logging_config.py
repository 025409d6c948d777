"""Shared logging setup for the tier merge tooling.

Entry points call ``configure_logging()`` once. Library code only creates
module loggers and never attaches handlers, so importing the package has no
logging side effects and writes no files.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Send diagnostics to stderr and, when log_file is given, append them there too.

    Does nothing if the root logger already has handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    root.addHandler(stderr_handler)

    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            root.warning(f"Cannot open log file {log_file}: {e}")
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    root.setLevel(level)
