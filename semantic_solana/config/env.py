"""
Environment variable loading for Semantic Solana.

- HELIUS_API_KEY: Helius API key; when unset the search endpoint serves demo data
- HELIUS_API_URL: Enhanced Transactions API base (default: https://api.helius.xyz)
- HELIUS_TIMEOUT_SEC: request timeout for the indexer (default: 15)
- SNS_PROXY_URL: Bonfida SNS proxy base used for .sol resolution
- DOMAIN_RESOLVE_TIMEOUT_SEC: per-lookup timeout for domain resolution (default: 4)
- DOMAIN_RESOLVE_WORKERS: parallel reverse lookups per request (default: 8)
- API_HOST / API_PORT: uvicorn bind address
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is semantic_solana/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_HELIUS_API_URL = "https://api.helius.xyz"
DEFAULT_SNS_PROXY_URL = "https://sns-sdk-proxy.bonfida.workers.dev"
DEFAULT_HELIUS_TIMEOUT_SEC = 15.0
DEFAULT_DOMAIN_RESOLVE_TIMEOUT_SEC = 4.0
DEFAULT_DOMAIN_RESOLVE_WORKERS = 8
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


def load_semantic_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set variables."""
    load_dotenv(_ENV_PATH)


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_helius_api_key() -> str:
    """Return HELIUS_API_KEY from env, or "" when unset."""
    load_semantic_env()
    return (os.getenv("HELIUS_API_KEY") or "").strip()


def is_demo_mode() -> bool:
    """True when no indexer key is configured and demo transactions are served."""
    return not get_helius_api_key()


def get_helius_api_url() -> str:
    load_semantic_env()
    url = (os.getenv("HELIUS_API_URL") or "").strip() or DEFAULT_HELIUS_API_URL
    return url.rstrip("/")


def get_helius_timeout() -> float:
    load_semantic_env()
    return _float_env("HELIUS_TIMEOUT_SEC", DEFAULT_HELIUS_TIMEOUT_SEC)


def get_sns_proxy_url() -> str:
    load_semantic_env()
    url = (os.getenv("SNS_PROXY_URL") or "").strip() or DEFAULT_SNS_PROXY_URL
    return url.rstrip("/")


def get_domain_resolve_timeout() -> float:
    load_semantic_env()
    return _float_env("DOMAIN_RESOLVE_TIMEOUT_SEC", DEFAULT_DOMAIN_RESOLVE_TIMEOUT_SEC)


def get_domain_resolve_workers() -> int:
    load_semantic_env()
    return _int_env("DOMAIN_RESOLVE_WORKERS", DEFAULT_DOMAIN_RESOLVE_WORKERS)


def get_api_host() -> str:
    load_semantic_env()
    return (os.getenv("API_HOST") or "").strip() or DEFAULT_API_HOST


def get_api_port() -> int:
    load_semantic_env()
    return _int_env("API_PORT", DEFAULT_API_PORT)
