"""
Application package initializer.

The catalog is organised in layers: ``core`` (configuration, logging,
database, errors), ``models`` and ``schemas`` (domain and wire types),
``repositories`` (persistence), ``services`` (validation, search and
use cases) and ``api`` (versioned HTTP routes).
"""

from .main import app  # noqa: F401
