"""Implementation of the import service port."""
from __future__ import annotations

from ormimport.application.commands.import_schema_command import ImportSchemaCommand
from ormimport.application.handlers.import_schema_handler import ImportSchemaHandler
from ormimport.application.queries.import_result import ImportResult
from ormimport.ports.input.import_service import ImportService


class ImportServiceImpl(ImportService):
  """Concrete implementation that delegates to the import handler."""

  def __init__(self, import_handler: ImportSchemaHandler) -> None:
    self._import_handler = import_handler

  def import_schema(self, command: ImportSchemaCommand) -> ImportResult:
    return self._import_handler.handle(command)
