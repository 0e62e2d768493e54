"""Naming conventions shared by the entity builder and relationship inference."""
from __future__ import annotations

import inflection


def type_name(table: str) -> str:
  """``group_users`` -> ``GroupUser``."""
  return inflection.camelize(inflection.singularize(table))


def table_name(type_: str) -> str:
  """``GroupUser`` -> ``group_users``."""
  return inflection.underscore(inflection.pluralize(type_))


def singular(name: str) -> str:
  return inflection.singularize(name)


def table_annotation(table: str) -> str | None:
  """Return the physical table name when it differs from the conventional one."""
  if table_name(type_name(table)) == table:
    return None
  return table
