# catalogue/config/settings.py

"""Central configuration for the catalogue data layer."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the catalogue data layer."""

    # --- Remote catalogue ---
    BASE_URL: str = os.getenv(
        "CATALOGUE_BASE_URL",
        "https://my-json-server.typicode.com/",
    )
    LIST_PATH: str = "ocadotechnology/mobile-challenge/products"
    DETAIL_PATH: str = "ocadotechnology/mobile-challenge/product"
    DETAIL_ID_PARAM: str = "id"

    # --- Transport ---
    REQUEST_TIMEOUT: int = int(
        os.getenv("CATALOGUE_REQUEST_TIMEOUT", "10")
    )                                   # Seconds before a request times out
    # IPv6 routes to the default host are known to stall until timeout
    PREFER_IPV4: bool = _env_flag("CATALOGUE_PREFER_IPV4", True)

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
        "Accept-Language": "en-GB,en;q=0.9",
    }

    # --- Connectivity ---
    CONNECTIVITY_PROBE_HOST: str = "8.8.8.8"
    CONNECTIVITY_PROBE_PORT: int = 53

    # --- Health check ---
    HEALTH_SLOW_MS: float = 5000.0      # Latency above this is "slow"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
