"""Outbound ports - interfaces for dependencies of the domain layer."""

from reldb.ports.outbound.table_lookup import TableLookup

__all__ = [
    "TableLookup",
]
