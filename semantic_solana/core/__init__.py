"""
Core utilities: shared exceptions for the service layer.

The classification core itself never raises; these exceptions belong to the
indexer client, the domain resolver and the API layer.
"""
