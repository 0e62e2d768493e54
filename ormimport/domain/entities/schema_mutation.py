"""Domain entities describing the ORM schema derived from a database."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class FieldType(str, Enum):
  INT = 'int'
  INT8 = 'int8'
  INT16 = 'int16'
  INT32 = 'int32'
  INT64 = 'int64'
  UINT = 'uint'
  UINT8 = 'uint8'
  UINT16 = 'uint16'
  UINT32 = 'uint32'
  UINT64 = 'uint64'
  FLOAT32 = 'float32'
  FLOAT = 'float'
  STRING = 'string'
  BOOL = 'bool'
  TIME = 'time'
  BYTES = 'bytes'
  ENUM = 'enum'
  JSON = 'json'
  UUID = 'uuid'


class EdgeDirection(str, Enum):
  TO = 'to'
  FROM = 'from'


@dataclass(frozen=True)
class Field:
  """A single entity field."""

  name: str
  type: FieldType
  optional: bool = False
  unique: bool = False
  comment: Optional[str] = None
  storage_key: Optional[str] = None
  enum_values: Tuple[str, ...] = ()
  schema_type: Tuple[Tuple[str, str], ...] = ()

  @property
  def column_name(self) -> str:
    """Physical column backing this field."""
    return self.storage_key or self.name

  def as_dict(self) -> dict:
    payload: Dict[str, Any] = {'name': self.name, 'type': self.type.value}
    if self.optional:
      payload['optional'] = True
    if self.unique:
      payload['unique'] = True
    if self.comment:
      payload['comment'] = self.comment
    if self.storage_key:
      payload['storage_key'] = self.storage_key
    if self.enum_values:
      payload['values'] = list(self.enum_values)
    if self.schema_type:
      payload['schema_type'] = dict(self.schema_type)
    return payload


@dataclass(frozen=True)
class Edge:
  """One endpoint of a relationship between two entities."""

  direction: EdgeDirection
  name: str
  target: str
  unique: bool = False
  ref_name: Optional[str] = None
  field: Optional[str] = None

  def as_dict(self) -> dict:
    payload: Dict[str, Any] = {
      'direction': self.direction.value,
      'name': self.name,
      'type': self.target,
    }
    if self.unique:
      payload['unique'] = True
    if self.ref_name:
      payload['ref'] = self.ref_name
    if self.field:
      payload['field'] = self.field
    return payload


@dataclass(frozen=True)
class Entity:
  """Schema mutation handed to the code emitter."""

  name: str
  table: str
  fields: Tuple[Field, ...] = ()
  edges: Tuple[Edge, ...] = ()
  table_annotation: Optional[str] = None

  def get_field(self, name: str) -> Optional[Field]:
    return next((f for f in self.fields if f.name == name), None)

  def get_edge(self, name: str) -> Optional[Edge]:
    return next((e for e in self.edges if e.name == name), None)

  def as_dict(self) -> dict:
    payload: Dict[str, Any] = {
      'name': self.name,
      'table': self.table,
      'fields': [f.as_dict() for f in self.fields],
      'edges': [e.as_dict() for e in self.edges],
    }
    if self.table_annotation:
      payload['annotations'] = {'table': self.table_annotation}
    return payload


@dataclass
class EntityDraft:
  """Mutable staging area for an entity while the import passes run.

  Fields and edges are immutable values; the draft only owns the lists.
  """

  name: str
  table: str
  fields: List[Field] = field(default_factory=list)
  edges: List[Edge] = field(default_factory=list)
  table_annotation: Optional[str] = None

  def has_field(self, name: str) -> bool:
    return any(f.name == name for f in self.fields)

  def add_field(self, new_field: Field) -> bool:
    """Append a field unless one with the same name exists. First insertion wins."""
    if self.has_field(new_field.name):
      return False
    self.fields.append(new_field)
    return True

  def find_column(self, column_name: str) -> Optional[Field]:
    return next((f for f in self.fields if f.column_name == column_name), None)

  def update_column(self, column_name: str, **changes: Any) -> Optional[Field]:
    """Replace the field backed by ``column_name`` with an updated copy."""
    for position, current in enumerate(self.fields):
      if current.column_name == column_name:
        updated = dataclasses.replace(current, **changes)
        self.fields[position] = updated
        return updated
    return None

  def add_edge(self, edge: Edge) -> None:
    self.edges.append(edge)

  def build(self) -> Entity:
    return Entity(
      name=self.name,
      table=self.table,
      fields=tuple(self.fields),
      edges=tuple(self.edges),
      table_annotation=self.table_annotation,
    )
