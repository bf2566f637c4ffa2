from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import insert

from models.asset_file import AssetFile
from utils.database import (
    any_uuid,
    as_uuid,
    as_vector,
    assets,
    get_upsert_columns,
    map_upsert_columns,
    optional_between,
)

JAN = datetime(2024, 1, 1, tzinfo=timezone.utc)
FEB = datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_optional_between_without_bounds_is_unconstrained() -> None:
    assert optional_between(assets.c.created_at) is None
    assert optional_between(assets.c.created_at, None, None) is None


def test_optional_between_lower_bound_only(sql) -> None:
    clause = optional_between(assets.c.created_at, JAN)
    rendered = sql(clause)
    assert rendered.startswith("assets.created_at >= ")
    assert "<=" not in rendered


def test_optional_between_upper_bound_only(sql) -> None:
    clause = optional_between(assets.c.created_at, to=FEB)
    rendered = sql(clause)
    assert rendered.startswith("assets.created_at <= ")
    assert ">=" not in rendered


def test_optional_between_both_bounds_is_closed_range(sql) -> None:
    clause = optional_between(assets.c.created_at, JAN, FEB)
    rendered = sql(clause)
    assert rendered.startswith("assets.created_at BETWEEN ")
    assert " AND " in rendered


def test_as_uuid_casts_bound_value(sql) -> None:
    rendered = sql(assets.c.id == as_uuid("not-a-uuid"))
    assert rendered.startswith("assets.id = CAST(")
    assert rendered.endswith("AS UUID)")


def test_any_uuid_casts_array(sql) -> None:
    rendered = sql(assets.c.owner_id == any_uuid(["a", "b"]))
    assert rendered.startswith("assets.owner_id = ANY (CAST(")
    assert rendered.endswith("AS UUID[]))")


def test_as_vector_formats_literal() -> None:
    compiled = select(as_vector([1, 2.5, -0.125])).compile(dialect=postgresql.dialect())
    assert "AS VECTOR" in str(compiled)
    assert "[1.0,2.5,-0.125]" in compiled.params.values()


def test_as_vector_keeps_full_float_precision() -> None:
    value = 0.12345678901234568
    compiled = select(as_vector([value, 1e-300])).compile(dialect=postgresql.dialect())
    (literal_value,) = compiled.params.values()
    assert [float(part) for part in literal_value.strip("[]").split(",")] == [value, 1e-300]


def test_upsert_columns_skip_primary_key() -> None:
    table = AssetFile.__table__
    stmt = insert(table).values(asset_id="a", type="preview", path="/p.jpg")
    columns = get_upsert_columns(stmt, "id")

    assert set(columns) == {c.name for c in table.columns} - {"id"}
    assert set(map_upsert_columns(columns, {"path": "/p.jpg", "type": "preview"})) == {"path", "type"}
