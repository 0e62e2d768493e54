"""Plain text presenter."""
from __future__ import annotations

from typing import List

from ormimport.application.queries.import_result import ImportResult
from ormimport.domain.entities.schema_mutation import Edge, Entity, Field
from ormimport.ports.input.result_presenter import ResultPresenter


class TextPresenter(ResultPresenter):
  def present(self, result: ImportResult) -> str:
    lines: List[str] = []
    for entity in result.entities:
      lines.extend(self._entity_lines(entity))
      lines.append('')

    if result.metadata:
      lines.extend([
        '=' * 60,
        'METADATA',
        '=' * 60,
      ])
      for key, value in result.metadata.items():
        lines.append(f'- {key}: {value}')
      lines.append('')

    lines.append(f'Execution time: {result.execution_time:.2f}s')
    if result.error:
      lines.append(f'ERROR: {result.error}')
    return '\n'.join(lines)

  def _entity_lines(self, entity: Entity) -> List[str]:
    header = f'{entity.name} (table: {entity.table})'
    lines = ['=' * 60, header, '=' * 60, 'fields:']
    lines.extend(f'  - {_describe_field(f)}' for f in entity.fields)
    if entity.edges:
      lines.append('edges:')
      lines.extend(f'  - {_describe_edge(e)}' for e in entity.edges)
    return lines


def _describe_field(f: Field) -> str:
  parts = [f'{f.name}: {f.type.value}']
  if f.enum_values:
    parts.append(f"({', '.join(f.enum_values)})")
  if f.optional:
    parts.append('optional')
  if f.unique:
    parts.append('unique')
  if f.storage_key:
    parts.append(f'storage_key={f.storage_key}')
  if f.comment:
    parts.append(f'# {f.comment}')
  return ' '.join(parts)


def _describe_edge(e: Edge) -> str:
  parts = [f'{e.direction.value} {e.name} -> {e.target}']
  if e.unique:
    parts.append('unique')
  if e.ref_name:
    parts.append(f'ref={e.ref_name}')
  if e.field:
    parts.append(f'field={e.field}')
  return ' '.join(parts)
