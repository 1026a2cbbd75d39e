"""Domain services for the relational engine.

Exports:
    - Catalog: Registry owning every live table by name
"""

from reldb.domain.services.catalog import Catalog

__all__ = [
    "Catalog",
]
