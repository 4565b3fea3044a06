"""HTTP API for content risk assessment."""
