"""Configuration, logging, database access and shared error types."""
