"""State shared by the two passes of one schema import."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ormimport.domain.entities.schema_mutation import Entity, EntityDraft


@dataclass
class ImportContext:
  """Entity drafts keyed by source table name, in insertion order."""

  drafts: Dict[str, EntityDraft] = field(default_factory=dict)

  def get(self, table: str) -> Optional[EntityDraft]:
    return self.drafts.get(table)

  def put(self, draft: EntityDraft) -> None:
    self.drafts[draft.table] = draft

  def __contains__(self, table: str) -> bool:
    return table in self.drafts

  def entities(self) -> List[Entity]:
    return [draft.build() for draft in self.drafts.values()]
