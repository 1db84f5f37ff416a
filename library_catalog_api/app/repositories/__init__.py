"""Persistence layer: the repository contract and its SQLite implementation."""
