"""
Logging setup for the shop console.

Operator-facing text goes through the console, so diagnostics must stay
off stdout: they go to stderr and to a shop log file kept next to the
database files (MECHANIC_SHOP_DB_DIR) unless an absolute path is given.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = "mechanic_shop.log"
NO_LOG_FILE = "off"


def resolve_log_file(logfile: Optional[str], db_dir: str) -> Optional[Path]:
    """Return where the shop log goes, or None when file logging is off."""
    if logfile is None or logfile.lower() == NO_LOG_FILE:
        return None
    path = Path(logfile)
    if not path.is_absolute():
        path = Path(db_dir) / path
    return path.resolve()


def setup_logging(level: str = "WARNING", logfile: Optional[str] = DEFAULT_LOG_FILE, db_dir: str = ".") -> None:
    """Configure the root logger once; later calls are no-ops."""
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stderr_handler = logging.StreamHandler()    # stderr, never the operator console
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    path = resolve_log_file(logfile, db_dir)
    if path is not None and not path.parent.is_dir():
        logger.warning("Log directory %s does not exist, logging to stderr only", path.parent)
    elif path is not None:
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
