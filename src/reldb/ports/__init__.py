"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Outbound ports: Dependencies a domain object has on its surroundings
  (e.g., TableLookup, through which a table resolves foreign key targets)
"""

from reldb.ports.outbound import TableLookup

__all__ = [
    "TableLookup",
]
