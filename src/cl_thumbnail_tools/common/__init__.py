"""Common module - errors, schemas, settings and byte sources."""
