"""Application layer: DTOs, interfaces, the write pipeline and use cases.

Use cases depend on the cache and storage protocols and on the
repositories; concrete backends are injected through ServiceContext.
"""
