"""
Configuration for the Semantic Solana service.

Loads settings from environment variables and an optional .env file at the
project root. The classification core reads no configuration; only the
indexer client, domain resolver and API server do.
"""

from semantic_solana.config.env import (  # noqa: F401
    get_api_host,
    get_api_port,
    get_domain_resolve_timeout,
    get_domain_resolve_workers,
    get_helius_api_key,
    get_helius_api_url,
    get_helius_timeout,
    get_sns_proxy_url,
    is_demo_mode,
    load_semantic_env,
)

__all__ = [
    "get_api_host",
    "get_api_port",
    "get_domain_resolve_timeout",
    "get_domain_resolve_workers",
    "get_helius_api_key",
    "get_helius_api_url",
    "get_helius_timeout",
    "get_sns_proxy_url",
    "is_demo_mode",
    "load_semantic_env",
]
