"""Structured logging (structlog). Use get_logger(__name__) in every module."""

from semantic_solana.semantic_logging.logger import bind_wallet, configure_logging, get_logger

__all__ = ["bind_wallet", "configure_logging", "get_logger"]
