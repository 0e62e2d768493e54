"""Command object representing a schema import request."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ImportSchemaCommand:
  database_url: str
  tables: Tuple[str, ...] = ()
  exclude_tables: Tuple[str, ...] = ()
  schema_path: Optional[str] = None

  def __post_init__(self) -> None:
    if not self.database_url:
      raise ValueError('database_url is required')
    overlap = set(self.tables) & set(self.exclude_tables)
    if overlap:
      raise ValueError(f"tables cannot be both included and excluded: {', '.join(sorted(overlap))}")
    if self.schema_path is not None and not self.schema_path.strip():
      raise ValueError('schema_path must not be empty when provided')
