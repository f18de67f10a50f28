from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_UPSTREAM_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbxrEUFOCZ8TL9HCVR2LPkSytsVG44Hc5wwvSVwhUF0D8soUXk61OmgX8QKBEJSRy7A6/exec"
)
SOURCES = ("webapp", "sheet")


def _normalize_env(v: Optional[str]) -> str:
    """
    Returns 'dev' or 'prod' only.
    Unset means local development.
    """
    s = (v or "").strip().lower()
    if s in ("prod", "production", "main", "live"):
        return "prod"
    return "dev"


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int_env(name: str, default: int) -> int:
    return int(_float_env(name, float(default)))


@dataclass(frozen=True)
class Settings:
    env: str = "dev"  # dev or prod

    # ---------------- Server ----------------
    host: str = "0.0.0.0"
    port: int = 3000

    # ---------------- Upstream ----------------
    source: str = "webapp"  # webapp (Apps Script JSON) or sheet (gspread)
    upstream_url: str = DEFAULT_UPSTREAM_URL
    fetch_timeout: float = 15.0

    # Only used when source == "sheet"
    sheet_url: str = ""
    worksheet_name: str = "Sheet1"
    service_account_file: str = ""

    # ---------------- Progress ----------------
    yearly_goal: float = 1000.0

    # ---------------- Dashboard ----------------
    api_url: str = "http://localhost:3000/api/data"

    log_level: str = "INFO"

    @property
    def listens(self) -> bool:
        # In production the ASGI app is mounted by an external host.
        return self.env != "prod"


def load_settings() -> Settings:
    # Local .env never overrides real environment variables.
    load_dotenv(override=False)

    env = _normalize_env(os.getenv("HEATMAP_ENV") or os.getenv("APP_ENV") or os.getenv("NODE_ENV"))
    port = _int_env("PORT", 3000)

    source = (os.getenv("HEATMAP_SOURCE") or "webapp").strip().lower()
    if source not in SOURCES:
        raise ValueError(f"HEATMAP_SOURCE must be one of {', '.join(SOURCES)}, got {source!r}")

    timeout = _float_env("HEATMAP_FETCH_TIMEOUT", 15.0)
    if timeout <= 0:
        raise ValueError("HEATMAP_FETCH_TIMEOUT must be positive")

    goal = _float_env("HEATMAP_YEARLY_GOAL", 1000.0)
    if goal <= 0:
        raise ValueError("HEATMAP_YEARLY_GOAL must be positive")

    return Settings(
        env=env,
        host=(os.getenv("HOST") or "").strip() or "0.0.0.0",
        port=port,
        source=source,
        upstream_url=(os.getenv("HEATMAP_UPSTREAM_URL") or "").strip() or DEFAULT_UPSTREAM_URL,
        fetch_timeout=timeout,
        sheet_url=(os.getenv("GOOGLE_SHEET_URL") or "").strip(),
        worksheet_name=(os.getenv("GOOGLE_WORKSHEET_NAME") or "").strip() or "Sheet1",
        service_account_file=(os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE") or "").strip(),
        yearly_goal=goal,
        api_url=(os.getenv("HEATMAP_API_URL") or "").strip() or f"http://localhost:{port}/api/data",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
