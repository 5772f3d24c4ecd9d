# ============================================================================
# TYPE MAPPER & SCHEMA SYNTHESIZER TESTS
# ============================================================================
# STATUS: Tests - Column clause and table DDL rendering
# PURPOSE: Verify type mapping, default expressions and clause ordering
# CREATED: 17 OCT 2026
# ============================================================================
"""
Type Mapper & Schema Synthesizer Tests

Run with:
    pytest tests/test_synthesizer.py -v
"""

import pytest

from core.contracts import FieldRole, KeyGeneration, SemanticType
from core.errors import InvalidDefaultForType
from core.models.field import FieldDescriptor, ForeignKey
from core.schema.synthesizer import quote_literal, render_column, render_default, synthesize_table
from core.schema.type_mapper import TYPE_MAP, column_type


def _descriptor(semantic_type, **kwargs):
    return FieldDescriptor(name=kwargs.pop("name", "f"), semantic_type=semantic_type, **kwargs)


# ============================================================================
# TYPE MAPPER
# ============================================================================


class TestColumnType:
    @pytest.mark.parametrize("semantic_type, expected", [
        (SemanticType.SERIAL, "serial"),
        (SemanticType.INTEGER, "integer"),
        (SemanticType.FLOAT, "float"),
        (SemanticType.TEXT, "text"),
        (SemanticType.DATE, "varchar(10)"),
        (SemanticType.BOOLEAN, "integer"),
        (SemanticType.DATETIME, "varchar(40)"),
    ])
    def test_fixed_types(self, semantic_type, expected):
        assert column_type(semantic_type) == expected

    def test_string_default_size(self):
        assert column_type(SemanticType.STRING) == "varchar(255)"

    def test_string_with_size(self):
        assert column_type(SemanticType.STRING, 50) == "varchar(50)"

    def test_string_configured_default_size(self):
        assert column_type(SemanticType.STRING, default_string_size=64) == "varchar(64)"

    def test_size_ignored_for_other_types(self):
        assert column_type(SemanticType.INTEGER, 50) == "integer"

    def test_every_semantic_type_is_mapped(self):
        mapped = set(TYPE_MAP) | {SemanticType.STRING}
        assert mapped == set(SemanticType)


# ============================================================================
# DEFAULTS
# ============================================================================


class TestRenderDefault:
    def test_string_is_quoted(self):
        assert render_default(_descriptor(SemanticType.STRING, has_default=True, default_value="draft")) == "default 'draft'"

    def test_embedded_quote_is_doubled(self):
        assert quote_literal("it's") == "'it''s'"

    @pytest.mark.parametrize("value, expected", [(True, "default 1"), (False, "default 0")])
    def test_bool(self, value, expected):
        assert render_default(_descriptor(SemanticType.BOOLEAN, has_default=True, default_value=value)) == expected

    @pytest.mark.parametrize("value", [0, 7, -3])
    def test_int(self, value):
        assert render_default(_descriptor(SemanticType.INTEGER, has_default=True, default_value=value)) == f"default {value}"

    def test_now_on_date(self):
        assert render_default(_descriptor(SemanticType.DATE, has_default=True, default_value="now")) == "default current_date"

    def test_now_on_datetime(self):
        descriptor = _descriptor(SemanticType.DATETIME, has_default=True, default_value="now")
        assert render_default(descriptor) == "default current_timestamp"

    @pytest.mark.parametrize("semantic_type", [
        SemanticType.STRING, SemanticType.INTEGER, SemanticType.TEXT, SemanticType.BOOLEAN,
    ])
    def test_now_on_other_types(self, semantic_type):
        descriptor = _descriptor(semantic_type, name="stamp", has_default=True, default_value="now")
        with pytest.raises(InvalidDefaultForType) as exc_info:
            render_default(descriptor)
        assert exc_info.value.field == "stamp"


# ============================================================================
# COLUMN CLAUSES
# ============================================================================


class TestRenderColumn:
    def test_auto_primary_key(self):
        descriptor = _descriptor(SemanticType.SERIAL, name="id", is_primary_key=True, is_auto=True)
        clause = render_column(descriptor, FieldRole.PRIMARY_KEY, KeyGeneration.AUTO)
        assert clause == "id serial primary key autoincrement"

    def test_serial_primary_key_without_auto(self):
        descriptor = _descriptor(SemanticType.SERIAL, name="id", is_primary_key=True)
        clause = render_column(descriptor, FieldRole.PRIMARY_KEY, KeyGeneration.SERIAL)
        assert clause == "id serial primary key"

    def test_supplied_primary_key(self):
        descriptor = _descriptor(SemanticType.STRING, name="slug", is_primary_key=True, size=80)
        clause = render_column(descriptor, FieldRole.PRIMARY_KEY, KeyGeneration.SUPPLIED)
        assert clause == "slug varchar(80) primary key"

    def test_not_null_unless_nullable(self):
        assert render_column(_descriptor(SemanticType.TEXT, name="body")) == "body text not null"
        assert render_column(_descriptor(SemanticType.TEXT, name="body", nullable=True)) == "body text"

    def test_clause_order(self):
        descriptor = _descriptor(
            SemanticType.INTEGER,
            name="owner",
            is_unique=True,
            has_default=True,
            default_value=1,
            foreign_key=ForeignKey(table="users", column="id"),
        )
        assert render_column(descriptor) == "owner integer unique default 1 not null references users(id)"

    def test_default_string_size_passed_through(self):
        clause = render_column(_descriptor(SemanticType.STRING, name="code"), default_string_size=32)
        assert clause == "code varchar(32) not null"


class TestSynthesizeTable:
    def test_statement(self):
        ddl = synthesize_table("Tag", ["id integer primary key", "label text not null"])
        assert ddl == "create table if not exists Tag (id integer primary key, label text not null);"
