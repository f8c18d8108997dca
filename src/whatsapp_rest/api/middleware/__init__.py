"""HTTP middleware for the bridge API."""
