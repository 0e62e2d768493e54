"""Output port for database schema introspection."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ormimport.domain.entities.database_schema import SchemaSnapshot
from ormimport.domain.value_objects.database_connection import DatabaseConnection


class SchemaInspector(Protocol):
  """Defines how the application reads schema metadata from a database."""

  def inspect_schema(
    self,
    connection: DatabaseConnection,
    tables: Optional[Sequence[str]] = None,
    exclude_tables: Optional[Sequence[str]] = None,
  ) -> SchemaSnapshot:
    """Return the snapshot of one schema, limited by the allow and deny lists."""
    ...
