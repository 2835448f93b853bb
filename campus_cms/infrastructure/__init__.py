"""Infrastructure: cache, persistence, object storage, security, external services."""
