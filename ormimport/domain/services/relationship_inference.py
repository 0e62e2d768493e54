"""Infers the edges between entities from foreign keys and join tables.

O2O two types: the child table has a unique reference (FK) to the parent.
O2O same type: the child table has a unique reference to itself.
O2M: the "many" side keeps the reference to the "one" side. The parent gets a
non-unique edge to its children, each child a unique edge back to its parent.
M2M: a join table holds two foreign keys forming its primary key; both
referenced entities get a non-unique edge.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ormimport.domain.entities.database_schema import DatabaseTable, ForeignKey
from ormimport.domain.entities.schema_mutation import Edge, EdgeDirection, EntityDraft
from ormimport.domain.errors import MissingJoinReferenceError
from ormimport.domain.services.entity_builder import ID_FIELD
from ormimport.domain.services.import_context import ImportContext
from ormimport.domain.services.naming import singular, table_name
from ormimport.domain.services.table_classifier import is_join_table

logger = logging.getLogger(__name__)

CHILD_PREFIX = 'child_'
PARENT_PREFIX = 'parent_'


@dataclass(frozen=True)
class RelationOptions:
  unique_edge_to_child: bool = False
  unique_edge_from_parent: bool = False
  recursive: bool = False
  edge_field: Optional[str] = None


class RelationshipInferrer:
  """Attaches inverse edge pairs to the drafts of an import context."""

  def infer(self, context: ImportContext, tables: Iterable[DatabaseTable]) -> None:
    for table in tables:
      if is_join_table(table):
        self.upsert_many_to_many(context, table)
        continue
      self.upsert_one_to_x(context, table)

  def upsert_one_to_x(self, context: ImportContext, table: DatabaseTable) -> None:
    unique_columns = table.unique_columns()
    for fk in table.single_column_foreign_keys():
      column = fk.columns[0]
      opts = RelationOptions(
        unique_edge_to_child=column in unique_columns,
        unique_edge_from_parent=True,
        recursive=fk.ref_table == table.name,
        edge_field=column,
      )
      parent = context.get(fk.ref_table)
      child = context.get(table.name)
      # At least one side was left out of the import: nothing to relate.
      if parent is None or child is None:
        logger.debug(
          'Skipping relation %s.%s -> %s: endpoint not imported',
          table.name, column, fk.ref_table,
        )
        continue
      logger.debug(
        'Relation %s.%s -> %s (%s%s)',
        table.name, column, fk.ref_table,
        'o2o' if opts.unique_edge_to_child else 'o2m',
        ', recursive' if opts.recursive else '',
      )
      upsert_relation(parent, child, opts)

  def upsert_many_to_many(self, context: ImportContext, table: DatabaseTable) -> None:
    if not is_join_table(table):
      raise ValueError(f'{table.name!r} is not a join table')
    # Guaranteed by is_join_table: exactly two single-column foreign keys.
    first, second = table.foreign_keys
    missing = _missing_references(context, (first, second))
    if missing:
      raise MissingJoinReferenceError(table.name, missing)
    node_a = context.get(first.ref_table)
    node_b = context.get(second.ref_table)
    opts = RelationOptions(recursive=first.ref_table == second.ref_table)
    logger.debug('Relation %s <-> %s via join table %s', first.ref_table, second.ref_table, table.name)
    upsert_relation(node_a, node_b, opts)


def upsert_relation(node_a: EntityDraft, node_b: EntityDraft, opts: RelationOptions) -> None:
  """Add the ``to`` edge on ``node_a`` and its inverse ``from`` edge on ``node_b``."""
  table_a = table_name(node_a.name)
  table_b = table_name(node_b.name)

  to_name = singular(table_b) if opts.unique_edge_to_child else table_b
  if opts.recursive:
    to_name = CHILD_PREFIX + to_name
  to_b = Edge(
    direction=EdgeDirection.TO,
    name=to_name,
    target=node_b.name,
    unique=opts.unique_edge_to_child,
  )

  from_name = table_a
  from_unique = False
  if opts.unique_edge_from_parent:
    from_name = singular(table_a)
    from_unique = True
  edge_field = None
  if opts.edge_field:
    edge_field = _resolve_edge_field(node_b, from_name, opts.edge_field)
  if opts.recursive:
    from_name = PARENT_PREFIX + from_name
  # The back-reference names the edge it inverts on the other side.
  from_a = Edge(
    direction=EdgeDirection.FROM,
    name=from_name,
    target=node_a.name,
    unique=from_unique,
    ref_name=to_b.name,
    field=edge_field,
  )

  node_a.add_edge(to_b)
  node_b.add_edge(from_a)


def _resolve_edge_field(child: EntityDraft, edge_name: str, column: str) -> Optional[str]:
  """Return the logical field backing ``column``, renamed when it collides with the edge name."""
  backing = child.find_column(column)
  # A reference column that is also the primary key is exposed as the id field.
  if backing is not None and backing.name == ID_FIELD:
    return None
  name = backing.name if backing is not None else column
  if edge_name != name:
    return name
  renamed = f'{name}_id'
  child.update_column(column, name=renamed, storage_key=column)
  return renamed


def _missing_references(context: ImportContext, fks: Iterable[ForeignKey]) -> List[str]:
  missing: List[str] = []
  for fk in fks:
    if fk.ref_table not in context and fk.ref_table not in missing:
      missing.append(fk.ref_table)
  return missing
