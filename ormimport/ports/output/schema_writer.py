"""Output port for persisting generated schema definitions."""
from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, Sequence

from ormimport.domain.entities.schema_mutation import Entity


class SchemaWriter(Protocol):
  def write(self, entities: Sequence[Entity], schema_path: str) -> List[Path]:
    """Write one definition per entity, overwriting existing files."""
    ...
