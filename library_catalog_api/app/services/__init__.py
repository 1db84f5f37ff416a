"""
Service layer.

Business rules live here: field validation, search resolution and the
catalog use cases.  Services talk to storage only through a
``BookRepository`` so the backend can be swapped without touching the
API handlers.
"""
