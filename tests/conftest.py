# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Fixtures shared across the suite
# PURPOSE: Reference model declarations and isolated configuration
# CREATED: 17 OCT 2026
# ============================================================================

import pytest

from core.config import reset_defaults


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    """Every test starts from built-in defaults, not the caller's env."""
    for name in (
        "MODELGEN_DEFAULT_STRING_SIZE",
        "MODELGEN_REQUIRE_PRIMARY_KEY",
        "MODELGEN_PARAMSTYLE",
        "DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def user_fields():
    """The User reference model: auto serial key, sized unique name, optional email."""
    return [
        ("id", "Serial", {"primary_key": True, "auto": True}),
        ("name", "String", {"size": 50, "unique": True}),
        ("email", "Optional[String]"),
        ("created_at", "DateTime", {"default": "now"}),
    ]


@pytest.fixture
def post_fields():
    """Caller-supplied key, foreign key, boolean default."""
    return [
        ("slug", "String", {"primary_key": True, "size": 80}),
        ("author_id", "Integer", {"foreign_key": "User.id"}),
        ("body", "Text"),
        ("published", "Boolean", {"default": False}),
        ("published_on", "Optional[Date]"),
    ]
