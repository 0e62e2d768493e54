"""JSON presenter implementation."""
from __future__ import annotations

import json
from typing import Any, Dict

from ormimport.application.queries.import_result import ImportResult
from ormimport.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  def payload(self, result: ImportResult) -> Dict[str, Any]:
    return {
      'status': result.status.value,
      'entities': [entity.as_dict() for entity in result.entities],
      'metadata': result.metadata,
      'execution_time': result.execution_time,
      'timestamp': result.timestamp.isoformat(),
      'error': result.error,
      'error_type': result.error_type,
    }

  def present(self, result: ImportResult) -> str:
    return json.dumps(self.payload(result), ensure_ascii=False, indent=2)
