"""University CMS backend: cached public reads, audited admin writes."""
