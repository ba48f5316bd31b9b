"""HTTP service mode: one card per request."""
