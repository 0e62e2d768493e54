import pytest

from builders import bigint, column, fk, table, unique, varchar
from ormimport.domain.entities.database_schema import ForeignKey, Index, TypeKind
from ormimport.domain.entities.schema_mutation import Field, FieldType
from ormimport.domain.errors import InvalidPrimaryKeyError, MalformedSchemaError, UnsupportedTypeError
from ormimport.domain.services.column_type_mapper import ColumnTypeMapper
from ormimport.domain.services.dialects import MySQLDialect, PostgresDialect
from ormimport.domain.services.entity_builder import EntityBuilder


@pytest.fixture
def builder():
  return EntityBuilder(ColumnTypeMapper(MySQLDialect()))


def test_builds_fields_in_declared_order(builder):
  users = table('users', [
    column('age', raw='tinyint'),
    bigint('id'),
    varchar('name'),
  ])
  draft = builder.build(users)
  assert draft.name == 'User'
  assert draft.table == 'users'
  assert draft.table_annotation is None
  # The primary key always comes first.
  assert [f.name for f in draft.fields] == ['id', 'age', 'name']
  assert [f.type for f in draft.fields] == [FieldType.INT, FieldType.INT8, FieldType.STRING]


def test_primary_key_is_renamed_to_id_with_storage_key(builder):
  users = table(
    'users',
    [varchar('name'), varchar('last_name', nullable=True, comment='not so boring')],
    pk=('name',),
    indexes=[unique('last_name')],
  )
  draft = builder.build(users)
  assert draft.fields == [
    Field(name='id', type=FieldType.STRING, storage_key='name'),
    Field(name='last_name', type=FieldType.STRING, optional=True, unique=True, comment='not so boring'),
  ]


def test_unique_index_on_primary_key_marks_id_unique(builder):
  users = table('users', [varchar('my_id')], pk=('my_id',), indexes=[unique('my_id')])
  (pk,) = builder.build(users).fields
  assert pk == Field(name='id', type=FieldType.STRING, unique=True, storage_key='my_id')


def test_primary_key_keeps_its_comment(builder):
  users = table('users', [bigint('id', comment='some id')])
  assert builder.build(users).fields[0].comment == 'some id'


def test_multi_column_unique_index_does_not_mark_fields(builder):
  users = table(
    'users',
    [bigint('id'), varchar('first'), varchar('last')],
    indexes=[Index(name='full_name', columns=('first', 'last'), unique=True)],
  )
  draft = builder.build(users)
  assert not any(f.unique for f in draft.fields)


def test_non_unique_index_does_not_mark_field(builder):
  users = table('users', [bigint('id'), varchar('email')], indexes=[Index('email_idx', ('email',))])
  assert builder.build(users).fields[1].unique is False


def test_foreign_key_column_is_forced_optional(builder):
  pets = table('pets', [bigint('id'), bigint('owner_id', nullable=False)], fks=[fk('owner_id', 'users')])
  owner = builder.build(pets).fields[1]
  assert owner.name == 'owner_id'
  assert owner.optional is True


def test_multi_column_foreign_key_columns_stay_plain_fields(builder):
  lines = table(
    'order_lines',
    [bigint('id'), bigint('order_id'), bigint('order_rev')],
    fks=[ForeignKey(name='order_ref', columns=('order_id', 'order_rev'), ref_table='orders')],
  )
  draft = builder.build(lines)
  assert [f.name for f in draft.fields] == ['id', 'order_id', 'order_rev']
  assert not any(f.optional for f in draft.fields)


@pytest.mark.parametrize('pk', [(), ('a', 'b')])
def test_primary_key_must_have_one_part(builder, pk):
  broken = table('things', [bigint('a'), bigint('b')], pk=pk)
  with pytest.raises(InvalidPrimaryKeyError) as excinfo:
    builder.build(broken)
  assert excinfo.value.table == 'things'
  assert excinfo.value.parts == len(pk)


def test_unknown_primary_key_column_is_malformed(builder):
  broken = table('things', [bigint('a')], pk=('id',))
  with pytest.raises(MalformedSchemaError):
    builder.build(broken)


def test_foreign_key_on_undeclared_column_is_malformed(builder):
  broken = table('things', [bigint('id')], fks=[fk('owner_id', 'users')])
  with pytest.raises(MalformedSchemaError):
    builder.build(broken)


def test_unsupported_column_aborts_build(builder):
  places = table('places', [bigint('id'), column('area', TypeKind.UNKNOWN, 'geometry')])
  with pytest.raises(UnsupportedTypeError):
    builder.build(places)


def test_repeated_visit_does_not_duplicate_fields(builder):
  users = table('users', [bigint('id'), varchar('name')])
  draft = builder.build(users)
  again = builder.build(table('users', [bigint('id'), varchar('name'), varchar('email')]), draft)
  assert again is draft
  assert [f.name for f in draft.fields] == ['id', 'name', 'email']


def test_duplicate_logical_name_keeps_first_insertion(builder):
  users = table('users', [varchar('user_id'), bigint('id')], pk=('user_id',))
  draft = builder.build(users)
  assert [(f.name, f.storage_key) for f in draft.fields] == [('id', 'user_id')]


def test_table_annotation_for_non_plural_table(builder):
  draft = builder.build(table('pet', [bigint('id')]))
  assert draft.name == 'Pet'
  assert draft.table_annotation == 'pet'


def test_postgres_serial_primary_key():
  builder = EntityBuilder(ColumnTypeMapper(PostgresDialect()))
  users = table('users', [column('user_id', TypeKind.SERIAL, 'serial')], pk=('user_id',))
  (pk,) = builder.build(users).fields
  assert pk == Field(
    name='id',
    type=FieldType.UINT,
    storage_key='user_id',
    schema_type=(('postgres', 'serial'),),
  )
