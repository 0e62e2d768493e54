"""Dialect-specific type rules used by the column type mapper."""
from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple

from ormimport.domain.entities.database_schema import ColumnType
from ormimport.domain.entities.schema_mutation import FieldType
from ormimport.domain.errors import UnsupportedDialectError
from ormimport.domain.value_objects.database_connection import DatabaseType


class DialectRules(Protocol):
  """Maps the dialect-dependent type families onto canonical field types."""

  name: str

  def integer_type(self, column_type: ColumnType) -> Optional[FieldType]:
    ...

  def float_type(self, column_type: ColumnType) -> FieldType:
    ...

  def pseudo_type(self, column_type: ColumnType) -> Optional[Tuple[FieldType, Dict[str, str]]]:
    """Return the field type and schema-type override for serial/uuid columns."""
    ...


class MySQLDialect:
  name = 'mysql'

  # (signed, unsigned)
  _INTEGERS = {
    'tinyint': (FieldType.INT8, FieldType.UINT8),
    'smallint': (FieldType.INT16, FieldType.UINT16),
    'mediumint': (FieldType.INT32, FieldType.UINT32),
    'int': (FieldType.INT32, FieldType.UINT32),
    'integer': (FieldType.INT32, FieldType.UINT32),
    # int64 is not used on purpose, the widest integer maps to the native int.
    'bigint': (FieldType.INT, FieldType.UINT64),
  }

  def integer_type(self, column_type: ColumnType) -> Optional[FieldType]:
    pair = self._INTEGERS.get(column_type.raw.lower())
    if pair is None:
      return None
    return pair[1] if column_type.unsigned else pair[0]

  def float_type(self, column_type: ColumnType) -> FieldType:
    # A precision from 0 to 23 results in a 4-byte single-precision FLOAT column,
    # 24 to 53 in an 8-byte DOUBLE column.
    if column_type.raw.lower() in ('double', 'double precision', 'real'):
      return FieldType.FLOAT
    if column_type.precision is not None and column_type.precision > 23:
      return FieldType.FLOAT
    return FieldType.FLOAT32

  def pseudo_type(self, column_type: ColumnType) -> Optional[Tuple[FieldType, Dict[str, str]]]:
    return None


class PostgresDialect:
  name = 'postgres'

  _INTEGERS = {
    'smallint': FieldType.INT16,
    'integer': FieldType.INT32,
    'int': FieldType.INT32,
    'bigint': FieldType.INT,
  }
  _SERIALS = ('smallserial', 'serial', 'bigserial')

  def integer_type(self, column_type: ColumnType) -> Optional[FieldType]:
    return self._INTEGERS.get(column_type.raw.lower())

  def float_type(self, column_type: ColumnType) -> FieldType:
    # real is 4 bytes with 6 decimal digits, double precision 8 bytes with 15.
    raw = column_type.raw.lower()
    if raw == 'real':
      return FieldType.FLOAT32
    if raw == 'double precision':
      return FieldType.FLOAT
    if column_type.precision is not None and column_type.precision > 14:
      return FieldType.FLOAT
    return FieldType.FLOAT32

  def pseudo_type(self, column_type: ColumnType) -> Optional[Tuple[FieldType, Dict[str, str]]]:
    raw = column_type.raw.lower()
    if raw in self._SERIALS:
      return FieldType.UINT, {self.name: raw}
    if raw == 'uuid':
      return FieldType.UUID, {self.name: raw}
    return None


def dialect_for(db_type: DatabaseType) -> DialectRules:
  """Select the type rules once, at the boundary."""
  if db_type == DatabaseType.MYSQL:
    return MySQLDialect()
  if db_type == DatabaseType.POSTGRESQL:
    return PostgresDialect()
  raise UnsupportedDialectError(db_type.value)
