"""Tests for snapshot models"""

import json

import pytest
from pydantic import ValidationError

from snapshot.drivers.sqlce import SQLCEDriver
from snapshot.models import CanonicalType, Column, PrimaryKey, SchemaSnapshot, Table


@pytest.fixture
def sample_snapshot() -> SchemaSnapshot:
    return SchemaSnapshot(
        schema="dbo",
        dialect=SQLCEDriver.dialect,
        tables=(
            Table(
                name="users",
                columns=(
                    Column(name="id", db_type="int", full_db_type="int", type=CanonicalType.INT, unique=True),
                    Column(name="email", db_type="nvarchar", full_db_type="nvarchar(255)", nullable=True),
                ),
                primary_key=PrimaryKey(name="PK_users", columns=("id",)),
            ),
        ),
    )


def test_snapshot_is_immutable(sample_snapshot: SchemaSnapshot) -> None:
    with pytest.raises(ValidationError):
        sample_snapshot.schema_name = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        sample_snapshot.tables[0].columns[0].name = "other"  # type: ignore[misc]


def test_snapshot_json(sample_snapshot: SchemaSnapshot) -> None:
    data = json.loads(sample_snapshot.model_dump_json(by_alias=True))

    assert data["schema"] == "dbo"
    assert data["dialect"]["lq"] == "["
    assert data["tables"][0]["primary_key"] == {"name": "PK_users", "columns": ["id"]}
    assert data["tables"][0]["columns"][0]["type"] == "int"
    assert data["tables"][0]["columns"][1]["type"] is None
    assert data["tables"][0]["foreign_keys"] == []


def test_snapshot_json_round_trip(sample_snapshot: SchemaSnapshot) -> None:
    assert SchemaSnapshot.model_validate_json(sample_snapshot.model_dump_json(by_alias=True)) == sample_snapshot


def test_lookups(sample_snapshot: SchemaSnapshot) -> None:
    users = sample_snapshot.get_table("users")
    assert users.get_column("email").full_db_type == "nvarchar(255)"

    with pytest.raises(KeyError):
        sample_snapshot.get_table("orders")
    with pytest.raises(KeyError):
        users.get_column("name")


def test_canonical_type_nullable() -> None:
    assert CanonicalType.NULL_INT64.nullable
    assert not CanonicalType.INT64.nullable
    assert all(t.value for t in CanonicalType)
