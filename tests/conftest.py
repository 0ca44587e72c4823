"""Pytest fixtures for test suite."""

import pytest
import yaml
from pathlib import Path
from typing import Any

from datagen.core import Field, FieldType, ProfileFields, ConstraintRule, get_settings


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def price() -> Field:
    return Field("price", FieldType.NUMERIC)


@pytest.fixture
def name() -> Field:
    return Field("name", FieldType.STRING)


@pytest.fixture
def traded() -> Field:
    return Field("traded", FieldType.DATETIME)


@pytest.fixture
def currency() -> Field:
    return Field("currency", FieldType.STRING)


@pytest.fixture
def active() -> Field:
    return Field("active", FieldType.BOOLEAN)


@pytest.fixture
def profile_fields(price: Field, name: Field, traded: Field, currency: Field, active: Field) -> ProfileFields:
    """Fields declared by the sample profile."""
    return ProfileFields([price, name, traded, currency, active])


@pytest.fixture
def rule() -> ConstraintRule:
    return ConstraintRule("prices are positive")


# =============================================================================
# YAML Fixtures
# =============================================================================


DATA_DIR = Path(__file__).parent / "data"


def load_yaml(name: str) -> list[dict[str, Any]]:
    """Load a YAML fixture file from tests/data."""
    with open(DATA_DIR / name, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture(scope="session")
def valid_constraint_cases() -> list[dict[str, Any]]:
    """Constraint records that parse, with the expected label."""
    return load_yaml("valid_constraints.yaml")


@pytest.fixture(scope="session")
def invalid_constraint_cases() -> list[dict[str, Any]]:
    """Constraint records that must be rejected, with a message fragment."""
    return load_yaml("invalid_constraints.yaml")
