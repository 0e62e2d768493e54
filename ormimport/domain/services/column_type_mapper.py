"""Domain service mapping native column types onto canonical fields."""
from __future__ import annotations

import dataclasses
from typing import Optional

from ormimport.domain.entities.database_schema import Column, TypeKind
from ormimport.domain.entities.schema_mutation import Field, FieldType
from ormimport.domain.errors import UnsupportedTypeError
from ormimport.domain.services.dialects import DialectRules

_DIRECT = {
  TypeKind.BINARY: FieldType.BYTES,
  TypeKind.BOOL: FieldType.BOOL,
  # decimal and numeric columns map to the widest float.
  TypeKind.DECIMAL: FieldType.FLOAT,
  TypeKind.JSON: FieldType.JSON,
  TypeKind.STRING: FieldType.STRING,
  TypeKind.TIME: FieldType.TIME,
}


class ColumnTypeMapper:
  """Maps one column to a ``Field`` using the injected dialect rules."""

  def __init__(self, dialect: DialectRules):
    self._dialect = dialect

  def map(self, column: Column, table: Optional[str] = None) -> Field:
    """Return the field for ``column`` or raise ``UnsupportedTypeError``."""
    mapped = self._convert(column, table)
    return self._apply_column_attributes(mapped, column)

  def _convert(self, column: Column, table: Optional[str]) -> Field:
    column_type = column.type
    kind = column_type.kind
    name = column.name

    if kind in _DIRECT:
      return Field(name=name, type=_DIRECT[kind])
    if kind == TypeKind.ENUM:
      return Field(name=name, type=FieldType.ENUM, enum_values=tuple(column_type.values))
    if kind == TypeKind.FLOAT:
      return Field(name=name, type=self._dialect.float_type(column_type))
    if kind == TypeKind.INTEGER:
      field_type = self._dialect.integer_type(column_type)
      if field_type is not None:
        return Field(name=name, type=field_type)
    if kind in (TypeKind.SERIAL, TypeKind.UUID):
      pseudo = self._dialect.pseudo_type(column_type)
      if pseudo is not None:
        field_type, schema_type = pseudo
        return Field(name=name, type=field_type, schema_type=tuple(sorted(schema_type.items())))
    raise UnsupportedTypeError(table, name, column_type.raw)

  @staticmethod
  def _apply_column_attributes(mapped: Field, column: Column) -> Field:
    return dataclasses.replace(
      mapped,
      optional=column.nullable,
      comment=column.comment or None,
    )
