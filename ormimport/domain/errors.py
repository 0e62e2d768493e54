"""Errors raised while importing a database schema."""
from __future__ import annotations

from typing import Optional, Sequence


class SchemaImportError(Exception):
  """Base exception for schema import failures.

  Every subclass is fatal for the whole import: no partial result is ever
  returned alongside one of these.
  """

  def __init__(self, message: str, table: Optional[str] = None):
    super().__init__(message)
    self.message = message
    self.table = table


class UnsupportedDialectError(SchemaImportError):
  def __init__(self, dialect: str):
    super().__init__(f'unsupported dialect {dialect!r}')
    self.dialect = dialect


class UnsupportedTypeError(SchemaImportError):
  """The native type of a column has no canonical field mapping."""

  def __init__(self, table: Optional[str], column: str, native_type: str):
    location = f'{table}.{column}' if table else column
    super().__init__(f'unsupported type {native_type!r} for column {location}', table=table)
    self.column = column
    self.native_type = native_type


class InvalidPrimaryKeyError(SchemaImportError):
  def __init__(self, table: str, parts: int):
    super().__init__(
      f'invalid primary key on table {table!r} - single part key must be present (found {parts} parts)',
      table=table,
    )
    self.parts = parts


class MissingJoinReferenceError(SchemaImportError):
  """A join table was imported without the tables it references."""

  def __init__(self, table: str, missing: Sequence[str]):
    missing_list = ', '.join(missing)
    super().__init__(
      f'join table {table!r} must be imported with its referenced tables (missing: {missing_list})',
      table=table,
    )
    self.missing = list(missing)


class MalformedSchemaError(SchemaImportError):
  """Table metadata is structurally incomplete."""
