"""
Application-level exceptions.

Raised by the indexer client and the domain resolver; the API layer maps them
to HTTP status codes. Classification and spam filtering never raise.
"""

from __future__ import annotations


class SemanticSolanaError(Exception):
    """Base class for all service errors."""


class HeliusAPIError(SemanticSolanaError):
    """The indexer API could not be reached or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HeliusRateLimitError(HeliusAPIError):
    """The indexer API answered 429 Too Many Requests."""

    def __init__(self, message: str = "Helius rate limit exceeded") -> None:
        super().__init__(message, status_code=429)


class DomainResolutionError(SemanticSolanaError):
    """A name-service lookup failed. Converted to None at the resolver's public surface."""
