"""Runtime settings, read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_json: bool = False
    cart_expiry_hours: int = 24
    stock_retries: int = 5
    order_number_attempts: int = 10


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        data_dir=Path(env.get("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        log_level=env.get("STOREFRONT_LOG_LEVEL", "INFO").upper(),
        log_json=env.get("STOREFRONT_LOG_JSON", "").lower() in _TRUE,
        cart_expiry_hours=int(env.get("STOREFRONT_CART_EXPIRY_HOURS", "24")),
        stock_retries=int(env.get("STOREFRONT_STOCK_RETRIES", "5")),
        order_number_attempts=int(env.get("STOREFRONT_ORDER_NUMBER_ATTEMPTS", "10")),
    )
