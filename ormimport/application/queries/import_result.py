"""Application-level import result representation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ormimport.domain.entities.schema_mutation import Entity


class ImportStatus(str, Enum):
  SUCCESS = 'success'
  ERROR = 'error'


@dataclass
class ImportResult:
  """Either the complete entity list or an error, never both."""

  status: ImportStatus
  entities: List[Entity] = field(default_factory=list)
  metadata: Dict[str, Any] = field(default_factory=dict)
  execution_time: float = 0.0
  timestamp: datetime = field(default_factory=datetime.utcnow)
  error: Optional[str] = None
  error_type: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.status == ImportStatus.SUCCESS
