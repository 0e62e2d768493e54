"""Markdown presenter for report-style outputs."""
from __future__ import annotations

from ormimport.application.queries.import_result import ImportResult
from ormimport.ports.input.result_presenter import ResultPresenter


class MarkdownPresenter(ResultPresenter):
  def present(self, result: ImportResult) -> str:
    lines = [
      '# Schema Import Report',
      '',
      f'**Status:** {result.status.value}',
      f'**Execution time:** {result.execution_time:.2f}s',
      '',
    ]

    for entity in result.entities:
      lines.append(f'## {entity.name}')
      lines.append(f'Table: `{entity.table}`')
      lines.append('')
      lines.append('| Field | Type | Optional | Unique | Storage key | Comment |')
      lines.append('| --- | --- | --- | --- | --- | --- |')
      for f in entity.fields:
        lines.append(
          f"| {f.name} | {f.type.value} | {'yes' if f.optional else ''} | "
          f"{'yes' if f.unique else ''} | {f.storage_key or ''} | {f.comment or ''} |"
        )
      lines.append('')
      if entity.edges:
        lines.append('| Edge | Direction | Type | Unique | Ref | Field |')
        lines.append('| --- | --- | --- | --- | --- | --- |')
        for e in entity.edges:
          lines.append(
            f"| {e.name} | {e.direction.value} | {e.target} | {'yes' if e.unique else ''} | "
            f"{e.ref_name or ''} | {e.field or ''} |"
          )
        lines.append('')

    if result.metadata:
      lines.append('## Metadata')
      for key, value in result.metadata.items():
        lines.append(f'- **{key}**: {value}')

    if result.error:
      lines.extend(['', f'**Error:** {result.error}'])

    return '\n'.join(lines)
