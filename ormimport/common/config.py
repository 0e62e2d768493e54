"""Application-level configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  database_url: Optional[str] = None
  schema_path: str = './schema'
  tables: Tuple[str, ...] = ()
  exclude_tables: Tuple[str, ...] = ()
  log_level: str = 'INFO'


def split_list(value: Optional[str]) -> Tuple[str, ...]:
  """Parse a comma-separated list, ignoring blanks."""
  if not value:
    return ()
  return tuple(item.strip() for item in value.split(',') if item.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  from os import getenv

  return Settings(
    database_url=getenv('DATABASE_URL'),
    schema_path=getenv('SCHEMA_PATH') or './schema',
    tables=split_list(getenv('IMPORT_TABLES')),
    exclude_tables=split_list(getenv('EXCLUDE_TABLES')),
    log_level=(getenv('LOG_LEVEL') or 'INFO').upper(),
  )
