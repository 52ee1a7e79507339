"""Infrastructure adapters (durable storage)."""
