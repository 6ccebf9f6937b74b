"""
Boundary layer for external system integrations.

Handles interactions with storage systems and the vector index.
Provides adapters and clients for infrastructure dependencies.
"""
