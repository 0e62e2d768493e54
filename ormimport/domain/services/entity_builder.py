"""Domain service turning an entity table into an entity draft."""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from ormimport.domain.entities.database_schema import DatabaseTable
from ormimport.domain.entities.schema_mutation import EntityDraft, Field
from ormimport.domain.errors import InvalidPrimaryKeyError
from ormimport.domain.services.column_type_mapper import ColumnTypeMapper
from ormimport.domain.services.naming import table_annotation, type_name

logger = logging.getLogger(__name__)

ID_FIELD = 'id'


class EntityBuilder:
  """Builds the fields of one non-join table."""

  def __init__(self, mapper: ColumnTypeMapper):
    self._mapper = mapper

  def build(self, table: DatabaseTable, draft: Optional[EntityDraft] = None) -> EntityDraft:
    """Create or extend the draft for ``table``.

    Passing the draft of an earlier visit keeps its fields; columns whose
    field already exists are not added again.
    """
    table.validate()
    if draft is None:
      draft = EntityDraft(
        name=type_name(table.name),
        table=table.name,
        table_annotation=table_annotation(table.name),
      )

    pk_column = self._primary_key_column(table)
    draft.add_field(self._resolve_primary_key(table))

    for column in table.columns:
      if column.name == pk_column:
        continue
      mapped = self._mapper.map(column, table.name)
      draft.add_field(mapped)

    for column_name in sorted(table.unique_columns()):
      draft.update_column(column_name, unique=True)

    # Reference columns are always optional, whatever their declared nullability.
    for fk in table.single_column_foreign_keys():
      draft.update_column(fk.columns[0], optional=True)

    logger.debug('Built entity %s from table %s with %d fields', draft.name, table.name, len(draft.fields))
    return draft

  @staticmethod
  def _primary_key_column(table: DatabaseTable) -> str:
    if len(table.primary_key) != 1:
      raise InvalidPrimaryKeyError(table.name, len(table.primary_key))
    return table.primary_key[0]

  def _resolve_primary_key(self, table: DatabaseTable) -> Field:
    column = table.column(self._primary_key_column(table))
    pk = self._mapper.map(column, table.name)
    if pk.name != ID_FIELD:
      return dataclasses.replace(pk, name=ID_FIELD, storage_key=pk.name)
    return pk
