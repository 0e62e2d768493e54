"""Input port for rendering import results."""
from __future__ import annotations

from typing import Protocol

from ormimport.application.queries.import_result import ImportResult


class ResultPresenter(Protocol):
  """Turns a finished import into the text a driving adapter prints."""

  def present(self, result: ImportResult) -> str:
    ...
