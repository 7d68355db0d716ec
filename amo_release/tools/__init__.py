"""Transport layer: HTTP exchange and request body encoding."""
