"""Request IDs, access logs and structlog wiring for the engine API."""
