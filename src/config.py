import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from logging_config import DEFAULT_LOG_FILE


@dataclass(frozen=True)
class ShopConfig:
    db_dir: str                 # Directory holding <dbname>.db
    log_level: str
    log_file: Optional[str]     # Relative paths live in db_dir; "off" disables
    labor_rate: int             # Charged per labor hour when closing a request

    def database_path(self, dbname):
        """Return the database file for a database name."""
        return os.path.join(self.db_dir, f"{dbname}.db")


def _getenv(name, default=None):
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def get_config() -> ShopConfig:
    """
    Build the shop configuration. This is the only place env vars are read;
    a `.env` file in the working directory is loaded first if present.
    """
    load_dotenv(override=False)

    rate = _getenv("MECHANIC_SHOP_LABOR_RATE", "50") or "50"
    try:
        labor_rate = int(rate)
    except ValueError:
        raise ValueError(f"MECHANIC_SHOP_LABOR_RATE must be an integer, got {rate!r}") from None
    if labor_rate < 0:
        raise ValueError(f"MECHANIC_SHOP_LABOR_RATE must not be negative, got {labor_rate}")

    return ShopConfig(
        db_dir=_getenv("MECHANIC_SHOP_DB_DIR", ".") or ".",
        log_level=_getenv("MECHANIC_SHOP_LOG_LEVEL", "WARNING") or "WARNING",
        log_file=_getenv("MECHANIC_SHOP_LOG_FILE", DEFAULT_LOG_FILE),
        labor_rate=labor_rate,
    )
