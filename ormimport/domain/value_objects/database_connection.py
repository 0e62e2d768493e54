"""Value object for database connection metadata."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.engine import make_url


class DatabaseType(str, Enum):
  POSTGRESQL = 'postgresql'
  MYSQL = 'mysql'
  SQLITE = 'sqlite'
  SQLSERVER = 'mssql'
  OTHER = 'other'


_ALIASES = {
  'postgres': DatabaseType.POSTGRESQL,
  'mariadb': DatabaseType.MYSQL,
}

DEFAULT_POSTGRES_SCHEMA = 'public'


@dataclass(frozen=True)
class DatabaseConnection:
  """Immutable representation of a database connection string."""

  url: str
  db_type: DatabaseType
  host: Optional[str]
  port: Optional[int]
  database: Optional[str]
  username: Optional[str] = None
  password: Optional[str] = None
  search_path: Optional[str] = None

  @property
  def schema_name(self) -> Optional[str]:
    """Schema to inspect: the database for MySQL, the search path for PostgreSQL."""
    if self.db_type == DatabaseType.POSTGRESQL:
      return self.search_path or DEFAULT_POSTGRES_SCHEMA
    return self.database

  @staticmethod
  def from_url(url: str) -> 'DatabaseConnection':
    if not url:
      raise ValueError('Database URL is required')

    parsed = make_url(url)
    dialect_name = parsed.get_backend_name()

    if dialect_name in _ALIASES:
      db_type = _ALIASES[dialect_name]
    elif dialect_name in DatabaseType._value2member_map_:
      db_type = DatabaseType(dialect_name)
    else:
      db_type = DatabaseType.OTHER

    search_path = parsed.query.get('search_path')
    if isinstance(search_path, tuple):
      search_path = search_path[0]

    return DatabaseConnection(
      url=url,
      db_type=db_type,
      host=parsed.host,
      port=parsed.port,
      database=parsed.database,
      username=parsed.username,
      password=parsed.password,
      search_path=search_path,
    )
