"""Input port defining the import service contract."""
from __future__ import annotations

from typing import Protocol

from ormimport.application.commands.import_schema_command import ImportSchemaCommand
from ormimport.application.queries.import_result import ImportResult


class ImportService(Protocol):
  def import_schema(self, command: ImportSchemaCommand) -> ImportResult:
    ...
