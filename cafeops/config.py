from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st

CONFIG_FILE_NAME = "settings.json"
ENV_SETTINGS_FILE = "CAFE_ERP_SETTINGS_FILE"
ENV_PREFIX = "CAFE_ERP_"


@dataclass(frozen=True)
class Settings:
    cafe_name: str = "CafeMilan"
    currency: str = "₹"
    tax_rate: Decimal = Decimal("0.08")
    allow_negative_stock: bool = False
    timezone: Optional[str] = None
    log_level: str = "INFO"


def _default_settings_file() -> Path:
    return Path.home() / ".cafe_erp" / CONFIG_FILE_NAME


def _load_persisted_settings(cfg: Path) -> dict:
    if cfg.exists():
        try:
            payload = json.loads(cfg.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return payload if isinstance(payload, dict) else {}
    return {}


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_rate(value) -> Decimal:
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Tax rate must be a number, got {value!r}.")
    if not rate.is_finite() or rate < 0:
        raise ValueError("Tax rate must be >= 0.")
    return rate


def _as_timezone(value) -> Optional[str]:
    if not value:
        return None
    name = str(value).strip()
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone {name!r}.")
    return name


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    # Priority order:
    # 1) Environment variables (CAFE_ERP_*)
    # 2) JSON settings file (CAFE_ERP_SETTINGS_FILE or ~/.cafe_erp/settings.json)
    # 3) Defaults
    env = os.environ if env is None else env

    cfg_path = env.get(ENV_SETTINGS_FILE)
    cfg = Path(cfg_path).expanduser() if cfg_path else _default_settings_file()
    raw = _load_persisted_settings(cfg)

    for field in ("cafe_name", "currency", "tax_rate", "allow_negative_stock", "timezone", "log_level"):
        key = ENV_PREFIX + field.upper()
        if env.get(key):
            raw[field] = env[key]

    defaults = Settings()
    return Settings(
        cafe_name=str(raw.get("cafe_name", defaults.cafe_name)),
        currency=str(raw.get("currency", defaults.currency)),
        tax_rate=_as_rate(raw.get("tax_rate", defaults.tax_rate)),
        allow_negative_stock=_as_bool(raw.get("allow_negative_stock", defaults.allow_negative_stock)),
        timezone=_as_timezone(raw.get("timezone")),
        log_level=str(raw.get("log_level", defaults.log_level)).upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@st.cache_resource
def get_settings() -> Settings:
    return load_settings()
