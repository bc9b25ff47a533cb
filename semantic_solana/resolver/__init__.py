# Domain resolution: Bonfida SNS proxy lookups, best effort.

from semantic_solana.resolver.domains import DomainResolver, attach_domains

__all__ = [
    "DomainResolver",
    "attach_domains",
]
