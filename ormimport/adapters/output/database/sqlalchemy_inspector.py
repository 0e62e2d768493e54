"""SQLAlchemy-powered schema inspector implementation."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import create_engine, inspect
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import URL, Engine, Inspector, make_url
from sqlalchemy.types import TypeEngine
from sqlalchemy.sql import sqltypes

from ormimport.domain.entities.database_schema import (
  Column,
  ColumnType,
  DatabaseTable,
  ForeignKey,
  Index,
  SchemaSnapshot,
  TypeKind,
)
from ormimport.domain.value_objects.database_connection import DatabaseConnection, DatabaseType
from ormimport.ports.output.schema_inspector import SchemaInspector

logger = logging.getLogger(__name__)

_BACKEND_ALIASES = {
  'postgres': 'postgresql',
}
_DEFAULT_DRIVERS = {
  'mysql': 'pymysql',
  'mariadb': 'pymysql',
}

_SERIALS = {
  'smallint': 'smallserial',
  'integer': 'serial',
  'bigint': 'bigserial',
}


class SqlAlchemyInspector(SchemaInspector):
  def __init__(self) -> None:
    self._engines: dict[str, Engine] = {}

  def inspect_schema(
    self,
    connection: DatabaseConnection,
    tables: Optional[Sequence[str]] = None,
    exclude_tables: Optional[Sequence[str]] = None,
  ) -> SchemaSnapshot:
    engine = self._get_engine(connection)
    inspector = inspect(engine)
    schema = connection.schema_name
    dialect = connection.db_type

    table_names = select_tables(inspector.get_table_names(schema=schema), tables, exclude_tables)
    logger.info('Inspecting %d tables of schema %s', len(table_names), schema)

    snapshot = SchemaSnapshot(name=schema or '', dialect=dialect.value)
    for table_name in table_names:
      snapshot.tables.append(self._describe_table(inspector, table_name, schema, dialect))
    return snapshot

  def _describe_table(
    self,
    inspector: Inspector,
    table_name: str,
    schema: Optional[str],
    dialect: DatabaseType,
  ) -> DatabaseTable:
    columns = [
      Column(
        name=column['name'],
        type=to_column_type(column['type'], dialect, column.get('default')),
        nullable=column.get('nullable', True),
        default=column.get('default'),
        comment=column.get('comment'),
      )
      for column in inspector.get_columns(table_name, schema=schema)
    ]
    pk = inspector.get_pk_constraint(table_name, schema=schema) or {}

    return DatabaseTable(
      name=table_name,
      columns=columns,
      primary_key=tuple(pk.get('constrained_columns') or ()),
      indexes=merge_indexes(
        inspector.get_indexes(table_name, schema=schema),
        inspector.get_unique_constraints(table_name, schema=schema),
      ),
      foreign_keys=self._foreign_keys(inspector, table_name, schema),
    )

  @staticmethod
  def _foreign_keys(inspector: Inspector, table_name: str, schema: Optional[str]) -> List[ForeignKey]:
    foreign_keys: List[ForeignKey] = []
    for fk in inspector.get_foreign_keys(table_name, schema=schema):
      referred_schema = fk.get('referred_schema')
      if referred_schema and schema and referred_schema != schema:
        logger.warning(
          'Ignoring foreign key %s on %s: it references schema %s',
          fk.get('name'), table_name, referred_schema,
        )
        continue
      options = fk.get('options') or {}
      foreign_keys.append(ForeignKey(
        name=fk.get('name') or '',
        columns=tuple(fk.get('constrained_columns') or ()),
        ref_table=fk['referred_table'],
        ref_columns=tuple(fk.get('referred_columns') or ()),
        on_delete=options.get('ondelete'),
        on_update=options.get('onupdate'),
      ))
    return foreign_keys

  def _get_engine(self, connection: DatabaseConnection) -> Engine:
    if connection.url not in self._engines:
      self._engines[connection.url] = create_engine(engine_url(connection.url))
    return self._engines[connection.url]


def engine_url(url: str) -> URL:
  """Turn an import URL into one ``create_engine`` accepts.

  ``postgres://`` is spelled ``postgresql`` by SQLAlchemy, and MySQL URLs
  without a driver use PyMySQL, the driver shipped with the ``mysql`` extra.
  ``search_path`` selects the schema to inspect, it is not a driver argument.
  """
  parsed = make_url(url).difference_update_query(['search_path'])
  backend = _BACKEND_ALIASES.get(parsed.get_backend_name(), parsed.get_backend_name())
  driver = parsed.get_driver_name() if '+' in parsed.drivername else _DEFAULT_DRIVERS.get(backend)
  drivername = f'{backend}+{driver}' if driver else backend
  return parsed.set(drivername=drivername)


def select_tables(
  available: Sequence[str],
  tables: Optional[Sequence[str]] = None,
  exclude_tables: Optional[Sequence[str]] = None,
) -> List[str]:
  """Apply the allow and deny lists, keeping the database order."""
  allowed = set(tables or ())
  excluded = set(exclude_tables or ())
  return [
    name for name in available
    if (not allowed or name in allowed) and name not in excluded
  ]


def merge_indexes(
  indexes: Sequence[Mapping[str, Any]],
  unique_constraints: Sequence[Mapping[str, Any]],
) -> List[Index]:
  """Combine reflected indexes and unique constraints into ``Index`` values."""
  merged: List[Index] = []
  seen: Dict[tuple, Index] = {}
  for index in indexes:
    # Expression indexes report None for their columns.
    column_names = tuple(name for name in index.get('column_names') or () if name)
    if not column_names:
      continue
    item = Index(name=index.get('name') or '', columns=column_names, unique=bool(index.get('unique')))
    merged.append(item)
    if item.unique:
      seen[column_names] = item
  for constraint in unique_constraints:
    column_names = tuple(constraint.get('column_names') or ())
    if not column_names or column_names in seen:
      continue
    item = Index(name=constraint.get('name') or '', columns=column_names, unique=True)
    merged.append(item)
    seen[column_names] = item
  return merged


def to_column_type(
  sa_type: TypeEngine,
  dialect: DatabaseType,
  default: Optional[str] = None,
) -> ColumnType:
  """Describe a reflected SQLAlchemy type as a ``ColumnType``."""
  if isinstance(sa_type, sqltypes.Enum):
    return ColumnType(kind=TypeKind.ENUM, raw='enum', values=tuple(sa_type.enums))
  if isinstance(sa_type, sqltypes.Boolean):
    return ColumnType(kind=TypeKind.BOOL, raw='boolean')
  # MySQL stores booleans as tinyint(1).
  if isinstance(sa_type, mysql.TINYINT) and getattr(sa_type, 'display_width', None) == 1:
    return ColumnType(kind=TypeKind.BOOL, raw='tinyint(1)')
  if isinstance(sa_type, sqltypes.Integer):
    raw = _integer_name(sa_type, dialect)
    if dialect == DatabaseType.POSTGRESQL and default and default.startswith('nextval(') and raw in _SERIALS:
      return ColumnType(kind=TypeKind.SERIAL, raw=_SERIALS[raw])
    return ColumnType(kind=TypeKind.INTEGER, raw=raw, unsigned=bool(getattr(sa_type, 'unsigned', False)))
  # Float is a Numeric subclass and must be matched first.
  if isinstance(sa_type, sqltypes.Float):
    return ColumnType(kind=TypeKind.FLOAT, raw=_float_name(sa_type), precision=sa_type.precision)
  if isinstance(sa_type, sqltypes.Numeric):
    return ColumnType(kind=TypeKind.DECIMAL, raw='decimal', precision=sa_type.precision)
  if isinstance(sa_type, sqltypes.JSON):
    return ColumnType(kind=TypeKind.JSON, raw='json')
  if isinstance(sa_type, sqltypes.Uuid):
    return ColumnType(kind=TypeKind.UUID, raw='uuid')
  if isinstance(sa_type, sqltypes._Binary):
    return ColumnType(kind=TypeKind.BINARY, raw=_type_name(sa_type))
  if isinstance(sa_type, sqltypes.String):
    return ColumnType(kind=TypeKind.STRING, raw=_type_name(sa_type))
  if isinstance(sa_type, (sqltypes.DateTime, sqltypes.Date, sqltypes.Time)):
    return ColumnType(kind=TypeKind.TIME, raw=_type_name(sa_type))
  return ColumnType(kind=TypeKind.UNKNOWN, raw=_type_name(sa_type))


def _integer_name(sa_type: TypeEngine, dialect: DatabaseType) -> str:
  if isinstance(sa_type, mysql.TINYINT):
    return 'tinyint'
  if isinstance(sa_type, mysql.MEDIUMINT):
    return 'mediumint'
  if isinstance(sa_type, sqltypes.BigInteger):
    return 'bigint'
  if isinstance(sa_type, sqltypes.SmallInteger):
    return 'smallint'
  return 'int' if dialect == DatabaseType.MYSQL else 'integer'


def _float_name(sa_type: TypeEngine) -> str:
  if isinstance(sa_type, sqltypes.DOUBLE_PRECISION):
    return 'double precision'
  if isinstance(sa_type, sqltypes.DOUBLE):
    return 'double'
  if isinstance(sa_type, sqltypes.REAL):
    return 'real'
  return 'float'


def _type_name(sa_type: TypeEngine) -> str:
  return type(sa_type).__name__.lower()
