"""HTTP API for archive uploads."""
