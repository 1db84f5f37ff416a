"""Version 1 of the Library Catalog API."""
