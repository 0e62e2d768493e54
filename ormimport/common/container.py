"""Simple dependency wiring helpers."""
from __future__ import annotations

from functools import lru_cache

from ormimport.adapters.output.database.sqlalchemy_inspector import SqlAlchemyInspector
from ormimport.adapters.output.filesystem.json_schema_writer import JsonSchemaWriter
from ormimport.application.handlers.import_schema_handler import ImportSchemaHandler
from ormimport.application.services.import_service_impl import ImportServiceImpl


@lru_cache(maxsize=1)
def create_import_service():
  inspector = SqlAlchemyInspector()
  writer = JsonSchemaWriter()
  import_handler = ImportSchemaHandler(inspector=inspector, writer=writer)
  return ImportServiceImpl(import_handler)
