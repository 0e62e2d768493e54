"""Distinguishes many-to-many join tables from entity tables."""
from __future__ import annotations

from ormimport.domain.entities.database_schema import DatabaseTable


def is_join_table(table: DatabaseTable) -> bool:
  """Return True when the table only bridges a many-to-many relationship.

  The primary key must have exactly two columns, the table exactly two
  single-column foreign keys, and the foreign key columns must be the
  primary key columns. Extra columns are allowed but not imported, since
  edges carry no fields.
  """
  if len(table.primary_key) != 2 or len(table.foreign_keys) != 2:
    return False
  if not all(fk.is_single_column for fk in table.foreign_keys):
    return False
  fk_columns = {fk.columns[0] for fk in table.foreign_keys}
  return fk_columns == set(table.primary_key)
