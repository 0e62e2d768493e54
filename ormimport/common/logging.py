"""Process-wide logging configuration."""
from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-7s | %(name)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_NOISY_LOGGERS = (
  'sqlalchemy.engine',
  'sqlalchemy.pool',
  'uvicorn.access',
)


def setup_logging(level: str = 'INFO', log_format: Optional[str] = None) -> None:
  """Configure the root logger. Logs go to stderr so stdout stays clean for output."""
  logging.basicConfig(
    level=getattr(logging, level.upper(), logging.INFO),
    format=log_format or DEFAULT_FORMAT,
    datefmt=DEFAULT_DATE_FORMAT,
    stream=sys.stderr,
    force=True,
  )
  for logger_name in _NOISY_LOGGERS:
    logging.getLogger(logger_name).setLevel(logging.WARNING)
