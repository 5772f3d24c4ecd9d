# ============================================================================
# MODEL COMPILER TESTS
# ============================================================================
# STATUS: Tests - End-to-end artifact generation
# PURPOSE: Verify the User reference model, cross-field properties,
#          error propagation and idempotence
# CREATED: 17 OCT 2026
# ============================================================================
"""
Model Compiler Tests

Covers:
1. User reference model (exact DDL, args, delete statement)
2. Properties that hold for every compiled model
3. Error propagation (whole model aborted, model name attached)
4. Degraded and strict no-primary-key modes
5. Plans bound to instances

Run with:
    pytest tests/test_compiler.py -v
"""

import logging
from types import SimpleNamespace

import pytest

from core.config import CompilerDefaults
from core.contracts import KeyGeneration
from core.errors import (
    ConfigurationError,
    InvalidDefaultForType,
    InvalidForeignKeySpec,
    MissingPrimaryKey,
    MultiplePrimaryKeys,
    PlanBindingError,
    UnsupportedFieldType,
    UnsupportedStructShape,
)
from core.models.field import ModelDeclaration
from core.schema.compiler import ModelCompiler, compile_model
from core.schema.extractor import coerce_declaration, extract_model


USER_DDL = (
    "create table if not exists User ("
    "id serial primary key autoincrement, "
    "name varchar(50) unique not null, "
    "email varchar(255), "
    "created_at varchar(40) default current_timestamp not null);"
)


def _column_clauses(ddl):
    body = ddl[ddl.index("(") + 1:ddl.rindex(")")]
    return body.split(", ")


# ============================================================================
# REFERENCE MODEL
# ============================================================================


class TestUserModel:
    @pytest.fixture
    def artifacts(self, user_fields):
        return ModelCompiler().compile(user_fields, name="User")

    def test_ddl(self, artifacts):
        assert artifacts.ddl == USER_DDL

    def test_primary_key(self, artifacts):
        assert artifacts.primary_key == "id"
        assert artifacts.primary_key_generation == KeyGeneration.AUTO

    def test_create_args(self, artifacts):
        assert artifacts.create_args == ("name", "email")

    def test_update_args(self, artifacts):
        assert artifacts.update_args == ("name", "email", "created_at")

    def test_delete_statement(self, artifacts):
        assert artifacts.delete_statement == "delete from User where id=?1;"

    def test_definition_kept(self, artifacts):
        assert artifacts.definition.field_names == ("id", "name", "email", "created_at")

    def test_textual_option_wrapper(self, user_fields):
        user_fields[2] = ("email", "Option<String>")
        assert ModelCompiler().compile(user_fields, name="User").ddl == USER_DDL

    def test_compile_model_helper(self, user_fields):
        assert compile_model(user_fields, "User").ddl == USER_DDL


# ============================================================================
# PROPERTIES
# ============================================================================


class TestProperties:
    @pytest.fixture(params=["user", "post"])
    def compiled(self, request, user_fields, post_fields):
        fields, name = (user_fields, "User") if request.param == "user" else (post_fields, "Post")
        return fields, ModelCompiler().compile(fields, name=name)

    def test_one_clause_per_field(self, compiled):
        fields, artifacts = compiled
        assert len(_column_clauses(artifacts.ddl)) == len(fields)

    def test_clauses_in_declaration_order(self, compiled):
        fields, artifacts = compiled
        assert [clause.split(" ")[0] for clause in _column_clauses(artifacts.ddl)] == [f[0] for f in fields]

    def test_primary_key_never_in_update_args(self, compiled):
        _, artifacts = compiled
        assert artifacts.primary_key not in artifacts.update_args

    def test_defaulted_fields_only_in_update_args(self, compiled):
        _, artifacts = compiled
        for descriptor in artifacts.definition.fields:
            if descriptor.is_primary_key:
                continue
            assert descriptor.name in artifacts.update_args
            assert (descriptor.name in artifacts.create_args) == (not descriptor.has_default)

    def test_idempotent(self, compiled):
        fields, artifacts = compiled
        again = ModelCompiler().compile(list(fields), name=artifacts.model_name)
        assert again == artifacts
        assert again.ddl == artifacts.ddl

    def test_post_model(self, post_fields):
        artifacts = ModelCompiler().compile(post_fields, name="Post")
        assert artifacts.ddl == (
            "create table if not exists Post ("
            "slug varchar(80) primary key, "
            "author_id integer not null references User(id), "
            "body text not null, "
            "published integer default 0 not null, "
            "published_on varchar(10));"
        )
        assert artifacts.primary_key_generation == KeyGeneration.SUPPLIED
        assert artifacts.create_args == ("slug", "author_id", "body", "published_on")
        assert artifacts.update_args == ("author_id", "body", "published", "published_on")

    def test_serial_key_without_auto(self):
        artifacts = ModelCompiler().compile([("id", "Serial", {"primary_key": True}), ("n", "Integer")], "Seq")
        assert artifacts.ddl == "create table if not exists Seq (id serial primary key, n integer not null);"
        assert artifacts.create_args == ("n",)

    def test_configured_string_size(self):
        compiler = ModelCompiler(CompilerDefaults(default_string_size=100))
        artifacts = compiler.compile([("id", "Integer", {"primary_key": True}), ("code", "String")], "Code")
        assert "code varchar(100) not null" in artifacts.ddl


# ============================================================================
# ERRORS
# ============================================================================


class TestErrors:
    @pytest.mark.parametrize("fields, error", [
        ([("id", "Uuid")], UnsupportedFieldType),
        ([("id", "Integer", {"foreign_key": "users"})], InvalidForeignKeySpec),
        ([("id", "Integer", {"default": "now"})], InvalidDefaultForType),
        ([("a", "Integer", {"primary_key": True}), ("b", "Integer", {"primary_key": True})], MultiplePrimaryKeys),
        ([], UnsupportedStructShape),
    ])
    def test_generation_fails(self, fields, error):
        with pytest.raises(error) as exc_info:
            ModelCompiler().compile(fields, name="Broken")
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.model == "Broken"
        assert "model=Broken" in str(exc_info.value)

    def test_later_field_error_aborts_whole_model(self, user_fields):
        user_fields.append(("updated_on", "Integer", {"default": "now"}))
        with pytest.raises(InvalidDefaultForType) as exc_info:
            ModelCompiler().compile(user_fields, name="User")
        assert exc_info.value.field == "updated_on"

    def test_unsupported_shape(self):
        with pytest.raises(UnsupportedStructShape):
            ModelCompiler().compile("id Integer", name="User")

    def test_compile_all_stops_at_first_failure(self, user_fields):
        sources = [
            coerce_declaration(user_fields, "User"),
            ModelDeclaration(name="Empty", fields=()),
            coerce_declaration([("id", "Uuid")], "Token"),
        ]
        with pytest.raises(UnsupportedStructShape) as exc_info:
            ModelCompiler().compile_all(sources)
        assert exc_info.value.model == "Empty"

    def test_compile_all_in_order(self, user_fields, post_fields):
        sources = [coerce_declaration(post_fields, "Post"), coerce_declaration(user_fields, "User")]
        assert [a.model_name for a in ModelCompiler().compile_all(sources)] == ["Post", "User"]

    def test_error_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="core.schema.compiler"):
            with pytest.raises(UnsupportedFieldType):
                ModelCompiler().compile([("id", "Uuid")], name="Token")
        assert "Generation aborted for Token" in caplog.text

    def test_error_logged_with_field(self, caplog):
        fields = [("id", "Serial", {"primary_key": True}), ("born", "Integer", {"default": "now"})]
        with caplog.at_level(logging.ERROR, logger="core.schema.compiler"):
            with pytest.raises(InvalidDefaultForType):
                ModelCompiler().compile(fields, name="Person")
        record = caplog.records[-1]
        assert record.extra["model"] == "Person"
        assert record.extra["field_name"] == "born"
        assert record.extra["component"] == "compiler"

    def test_fields_planned_in_field_context(self, user_fields, caplog):
        with caplog.at_level(logging.DEBUG, logger="core.schema.compiler"):
            ModelCompiler().compile(user_fields, name="User")
        planned = [r.extra["field_name"] for r in caplog.records if r.getMessage().startswith("Planned")]
        assert planned == ["id", "name", "email", "created_at"]


# ============================================================================
# PRIMARY KEY MODES
# ============================================================================


class TestNoPrimaryKey:
    FIELDS = [("name", "String"), ("value", "Optional[Text]")]

    def test_degraded_mode(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.schema.compiler"):
            artifacts = ModelCompiler().compile(self.FIELDS, name="Setting")
        assert artifacts.primary_key == ""
        assert not artifacts.has_primary_key
        assert artifacts.primary_key_generation is None
        assert artifacts.create_args == ("name", "value")
        assert artifacts.update_args == ("name", "value")
        assert "has no primary key" in caplog.text

    def test_update_and_delete_refused(self):
        artifacts = ModelCompiler().compile(self.FIELDS, name="Setting")
        instance = {"name": "theme", "value": "dark"}
        with pytest.raises(PlanBindingError):
            artifacts.update_plan(instance)
        with pytest.raises(PlanBindingError):
            artifacts.delete_params(instance)

    def test_strict_mode(self):
        compiler = ModelCompiler(CompilerDefaults(require_primary_key=True))
        with pytest.raises(MissingPrimaryKey) as exc_info:
            compiler.compile(self.FIELDS, name="Setting")
        assert exc_info.value.model == "Setting"

    def test_strict_mode_from_env(self, monkeypatch):
        monkeypatch.setenv("MODELGEN_REQUIRE_PRIMARY_KEY", "true")
        with pytest.raises(MissingPrimaryKey):
            ModelCompiler().compile(self.FIELDS, name="Setting")


# ============================================================================
# PLANS
# ============================================================================


class TestPlans:
    @pytest.fixture
    def artifacts(self, user_fields):
        return ModelCompiler().compile(user_fields, name="User")

    def test_create_plan_from_mapping(self, artifacts):
        plan = artifacts.create_plan({"id": None, "name": "ann", "email": None, "created_at": None})
        assert plan.values == (("name", "ann"), ("email", None))
        assert plan.names == ("name", "email")
        assert plan.params == ("ann", None)

    def test_update_plan_from_object(self, artifacts):
        user = SimpleNamespace(id=7, name="ann", email="a@x.io", created_at="2026-10-17T00:00:00")
        plan = artifacts.update_plan(user)
        assert plan.primary_key == "id"
        assert plan.primary_key_value == 7
        assert plan.names == ("name", "email", "created_at")

    def test_delete_params(self, artifacts):
        assert artifacts.delete_params({"id": 7}) == (7,)

    def test_missing_value(self, artifacts):
        with pytest.raises(PlanBindingError) as exc_info:
            artifacts.create_plan({"name": "ann"})
        assert exc_info.value.field == "email"

    def test_compile_definition(self, user_fields):
        definition = extract_model(user_fields, "User")
        assert ModelCompiler().compile_definition(definition).ddl == USER_DDL
