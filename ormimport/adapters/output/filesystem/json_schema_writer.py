"""Writes one JSON definition per imported entity."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence

from ormimport.domain.entities.schema_mutation import Entity
from ormimport.ports.output.schema_writer import SchemaWriter

logger = logging.getLogger(__name__)


class JsonSchemaWriter(SchemaWriter):
  """Fully overwrites ``<schema_path>/<table>.json`` for every entity."""

  def write(self, entities: Sequence[Entity], schema_path: str) -> List[Path]:
    target = Path(schema_path)
    target.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for entity in entities:
      path = target / f'{entity.table}.json'
      path.write_text(json.dumps(entity.as_dict(), ensure_ascii=False, indent=2) + '\n', encoding='utf-8')
      written.append(path)
    logger.info('Wrote %d schema definitions to %s', len(written), target)
    return written
