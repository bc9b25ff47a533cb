"""
API server package: HTTP interface over the classification core.

Search a wallet's human-readable history by address or .sol domain, and
resolve .sol names. Delegates fetching to the Helius client and naming to the
domain resolver.
"""
