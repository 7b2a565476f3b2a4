from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]  # .../package

DEFAULT_ENDPOINT = "http://localhost:8082/api/v1"


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    if v is not None and v.strip() != "":
        return v.strip()
    return default


def _get_float(key: str, default: float) -> float:
    v = _get_env(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {v!r}") from None


@dataclass(frozen=True)
class Settings:
    api_endpoint: str
    auth_token: Optional[str]
    username: Optional[str]
    debounce_seconds: float
    request_timeout: float


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Read settings from the environment, after loading `.env` at the project root.
    Variables already set in the environment win over the file.
    """
    load_dotenv(dotenv_path=env_file or ROOT_DIR / ".env")

    debounce_ms = _get_float("STOREFRONT_DEBOUNCE_MS", 500)
    timeout = _get_float("STOREFRONT_TIMEOUT", 10.0)
    if debounce_ms < 0 or timeout <= 0:
        raise ValueError("STOREFRONT_DEBOUNCE_MS and STOREFRONT_TIMEOUT must be positive")

    return Settings(
        api_endpoint=_get_env("STOREFRONT_API_ENDPOINT", DEFAULT_ENDPOINT),
        auth_token=_get_env("STOREFRONT_TOKEN"),
        username=_get_env("STOREFRONT_USERNAME"),
        debounce_seconds=debounce_ms / 1000,
        request_timeout=timeout,
    )
