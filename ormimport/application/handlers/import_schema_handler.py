"""Application handler that orchestrates schema imports."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ormimport.application.commands.import_schema_command import ImportSchemaCommand
from ormimport.application.queries.import_result import ImportResult, ImportStatus
from ormimport.domain.errors import SchemaImportError
from ormimport.domain.services.dialects import DialectRules, dialect_for
from ormimport.domain.services.schema_importer import SchemaImporter
from ormimport.domain.value_objects.database_connection import DatabaseConnection
from ormimport.ports.output.schema_inspector import SchemaInspector
from ormimport.ports.output.schema_writer import SchemaWriter

logger = logging.getLogger(__name__)


class ImportSchemaHandler:
  """Inspects the database, runs the import and optionally writes the result."""

  def __init__(
    self,
    inspector: SchemaInspector,
    writer: Optional[SchemaWriter] = None,
    importer_factory: Callable[[DialectRules], SchemaImporter] = SchemaImporter,
  ):
    self._inspector = inspector
    self._writer = writer
    self._importer_factory = importer_factory

  def handle(self, command: ImportSchemaCommand) -> ImportResult:
    start = time.perf_counter()
    try:
      connection = DatabaseConnection.from_url(command.database_url)
      dialect = dialect_for(connection.db_type)
      snapshot = self._inspector.inspect_schema(
        connection,
        tables=command.tables,
        exclude_tables=command.exclude_tables,
      )
      logger.debug('Inspected schema %s:%s', snapshot.name, snapshot.summary())
      entities = self._importer_factory(dialect).import_schema(snapshot)

      metadata = {
        'schema': snapshot.name,
        'dialect': dialect.name,
        'tables': snapshot.table_names(),
        'entities': len(entities),
      }
      if command.schema_path and self._writer is not None:
        written = self._writer.write(entities, command.schema_path)
        metadata['written_files'] = [str(path) for path in written]

      return ImportResult(
        status=ImportStatus.SUCCESS,
        entities=entities,
        metadata=metadata,
        execution_time=time.perf_counter() - start,
      )
    except SchemaImportError as exc:
      logger.error('Schema import failed: %s', exc)
      return self._failure(exc, start)
    except Exception as exc:  # noqa: BLE001
      logger.exception('Schema import failed unexpectedly')
      return self._failure(exc, start)

  @staticmethod
  def _failure(exc: Exception, start: float) -> ImportResult:
    return ImportResult(
      status=ImportStatus.ERROR,
      execution_time=time.perf_counter() - start,
      error=str(exc),
      error_type=type(exc).__name__,
    )
