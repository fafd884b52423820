from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from postcodenl_client.core.models import (
    DEFAULT_BASE_URL,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_TOTAL_TIMEOUT_SECONDS,
    ClientConfig,
)

load_dotenv()


@dataclass
class Settings:
    client: ClientConfig

    # keep request/response snapshots in memory
    debug: bool


def _clean(s: str | None) -> str:
    return (s or "").strip().strip('"').strip("'")


def _int(name: str, default: int) -> int:
    v = _clean(os.getenv(name, str(default)))
    return int(v)


def _bool(name: str, default: bool) -> bool:
    v = _clean(os.getenv(name, "1" if default else "0")).lower()
    return v in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    """
    Build Settings from the environment (.env is loaded on import).
    POSTCODENL_APP_KEY and POSTCODENL_APP_SECRET are required.
    """
    app_key = _clean(os.getenv("POSTCODENL_APP_KEY"))
    app_secret = _clean(os.getenv("POSTCODENL_APP_SECRET"))

    if not app_key or not app_secret:
        raise RuntimeError(
            "Missing POSTCODENL_APP_KEY / POSTCODENL_APP_SECRET in environment (.env)."
        )

    return Settings(
        client=ClientConfig(
            app_key=app_key,
            app_secret=app_secret,
            base_url=_clean(os.getenv("POSTCODENL_BASE_URL")) or DEFAULT_BASE_URL,
            connect_timeout_seconds=_int("POSTCODENL_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS),
            total_timeout_seconds=_int("POSTCODENL_TIMEOUT_SECONDS", DEFAULT_TOTAL_TIMEOUT_SECONDS),
        ),
        debug=_bool("POSTCODENL_DEBUG", False),
    )
