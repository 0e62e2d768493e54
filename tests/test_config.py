import logging

import pytest

from ormimport.common.config import Settings, get_settings, split_list
from ormimport.common.logging import setup_logging


@pytest.fixture(autouse=True)
def fresh_settings():
  get_settings.cache_clear()
  yield
  get_settings.cache_clear()


def test_split_list():
  assert split_list(None) == ()
  assert split_list('') == ()
  assert split_list(' users, ,cards ') == ('users', 'cards')


def test_settings_from_environment(monkeypatch):
  monkeypatch.setenv('DATABASE_URL', 'postgresql://u:p@db/app')
  monkeypatch.setenv('SCHEMA_PATH', './ent/schema')
  monkeypatch.setenv('IMPORT_TABLES', 'users,cards')
  monkeypatch.setenv('EXCLUDE_TABLES', 'audit')
  monkeypatch.setenv('LOG_LEVEL', 'debug')

  settings = get_settings()

  assert settings == Settings(
    database_url='postgresql://u:p@db/app',
    schema_path='./ent/schema',
    tables=('users', 'cards'),
    exclude_tables=('audit',),
    log_level='DEBUG',
  )


def test_settings_defaults(monkeypatch):
  for name in ('DATABASE_URL', 'SCHEMA_PATH', 'IMPORT_TABLES', 'EXCLUDE_TABLES', 'LOG_LEVEL'):
    monkeypatch.delenv(name, raising=False)
  settings = get_settings()
  assert settings.schema_path == './schema'
  assert settings.tables == ()
  assert settings.log_level == 'INFO'


def test_setup_logging_quiets_engine_loggers():
  setup_logging('debug')
  assert logging.getLogger().level == logging.DEBUG
  assert logging.getLogger('sqlalchemy.engine').level == logging.WARNING
