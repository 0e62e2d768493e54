"""Domain service sequencing the two passes of a schema import."""
from __future__ import annotations

import logging
from typing import List, Optional

from ormimport.domain.entities.database_schema import SchemaSnapshot
from ormimport.domain.entities.schema_mutation import Entity
from ormimport.domain.services.column_type_mapper import ColumnTypeMapper
from ormimport.domain.services.dialects import DialectRules
from ormimport.domain.services.entity_builder import EntityBuilder
from ormimport.domain.services.import_context import ImportContext
from ormimport.domain.services.relationship_inference import RelationshipInferrer
from ormimport.domain.services.table_classifier import is_join_table

logger = logging.getLogger(__name__)


class SchemaImporter:
  """Builds schema mutations from a snapshot.

  Pass 1 creates an entity for every non-join table, pass 2 attaches the
  edges for every table, join tables included. Any error aborts the whole
  import and no entity is returned.
  """

  def __init__(
    self,
    dialect: DialectRules,
    entity_builder: Optional[EntityBuilder] = None,
    inferrer: Optional[RelationshipInferrer] = None,
  ) -> None:
    self._entity_builder = entity_builder or EntityBuilder(ColumnTypeMapper(dialect))
    self._inferrer = inferrer or RelationshipInferrer()

  def import_schema(self, snapshot: SchemaSnapshot) -> List[Entity]:
    context = ImportContext()
    join_tables = [table.name for table in snapshot.tables if is_join_table(table)]

    for table in snapshot.tables:
      if table.name in join_tables:
        table.validate()
        continue
      draft = self._entity_builder.build(table, context.get(table.name))
      context.put(draft)

    self._inferrer.infer(context, snapshot.tables)

    entities = context.entities()
    logger.info(
      'Imported %d entities from schema %s (%d join tables)',
      len(entities), snapshot.name, len(join_tables),
    )
    return entities
