"""Domain entities representing an introspected database schema."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from ormimport.domain.errors import MalformedSchemaError


class TypeKind(str, Enum):
  """Family of a native column type, independent of the dialect spelling."""

  BINARY = 'binary'
  BOOL = 'bool'
  DECIMAL = 'decimal'
  ENUM = 'enum'
  FLOAT = 'float'
  INTEGER = 'integer'
  JSON = 'json'
  STRING = 'string'
  TIME = 'time'
  SERIAL = 'serial'
  UUID = 'uuid'
  UNKNOWN = 'unknown'


@dataclass(frozen=True)
class ColumnType:
  """Native type descriptor of a column."""

  kind: TypeKind
  raw: str
  unsigned: bool = False
  precision: Optional[int] = None
  values: Tuple[str, ...] = ()

  def __str__(self) -> str:
    return self.raw


@dataclass(frozen=True)
class Column:
  """Represents a database column definition."""

  name: str
  type: ColumnType
  nullable: bool = False
  default: Optional[str] = None
  comment: Optional[str] = None


@dataclass(frozen=True)
class Index:
  name: str
  columns: Tuple[str, ...]
  unique: bool = False


@dataclass(frozen=True)
class ForeignKey:
  """A foreign key constraint declared on the child table."""

  name: str
  columns: Tuple[str, ...]
  ref_table: str
  ref_columns: Tuple[str, ...] = ()
  on_delete: Optional[str] = None
  on_update: Optional[str] = None

  @property
  def is_single_column(self) -> bool:
    return len(self.columns) == 1


@dataclass(frozen=True)
class DatabaseTable:
  """Represents a database table and its keys."""

  name: str
  columns: List[Column]
  primary_key: Tuple[str, ...] = ()
  indexes: List[Index] = field(default_factory=list)
  foreign_keys: List[ForeignKey] = field(default_factory=list)

  def column_names(self) -> List[str]:
    return [column.name for column in self.columns]

  def column(self, name: str) -> Column:
    """Return a declared column or fail when keys reference an unknown one."""
    found = next((column for column in self.columns if column.name == name), None)
    if found is None:
      raise MalformedSchemaError(f'table {self.name!r} has no column {name!r}', table=self.name)
    return found

  def unique_columns(self) -> Set[str]:
    """Columns covered by a single-column unique index."""
    return {index.columns[0] for index in self.indexes if index.unique and len(index.columns) == 1}

  def single_column_foreign_keys(self) -> List[ForeignKey]:
    return [fk for fk in self.foreign_keys if fk.is_single_column]

  def validate(self) -> None:
    """Check that every key and index only references declared columns."""
    if not self.name:
      raise MalformedSchemaError('table without a name')
    declared = set(self.column_names())
    referenced: List[str] = list(self.primary_key)
    for index in self.indexes:
      if not index.columns:
        raise MalformedSchemaError(f'index {index.name!r} on {self.name!r} has no columns', table=self.name)
      referenced.extend(index.columns)
    for fk in self.foreign_keys:
      if not fk.columns or not fk.ref_table:
        raise MalformedSchemaError(f'foreign key {fk.name!r} on {self.name!r} is incomplete', table=self.name)
      referenced.extend(fk.columns)
    for name in referenced:
      if name not in declared:
        raise MalformedSchemaError(f'table {self.name!r} has no column {name!r}', table=self.name)


@dataclass
class SchemaSnapshot:
  """Represents the introspected schema of one database."""

  name: str
  dialect: str
  tables: List[DatabaseTable] = field(default_factory=list)

  def table_names(self) -> List[str]:
    return [table.name for table in self.tables]

  def summary(self) -> str:
    """Generate a human-readable summary of the snapshot."""
    lines: List[str] = ['']
    for table in self.tables:
      fk_targets: Dict[str, str] = {
        fk.columns[0]: fk.ref_table for fk in table.single_column_foreign_keys()
      }
      lines.append(f'Table: {table.name}')
      for column in table.columns:
        column_meta = []
        if column.name in table.primary_key:
          column_meta.append('PK')
        if column.name in fk_targets:
          column_meta.append(f'FK->{fk_targets[column.name]}')
        column_desc = f'  - {column.name}: {column.type}'
        if column_meta:
          column_desc += f" ({', '.join(column_meta)})"
        column_desc += ' NULLABLE' if column.nullable else ' NOT NULL'
        lines.append(column_desc)
      lines.append('')
    return '\n'.join(lines)
