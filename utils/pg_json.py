"""
PostgreSQL JSON projection helpers
All store-specific JSON syntax used by the search builder lives here
"""
from sqlalchemy import func, literal_column, select
from sqlalchemy.dialects.postgresql import JSON, JSONB
from sqlalchemy.sql import Select


def row_to_jsonb(from_clause):
    """to_jsonb(<whole row>) for a table, alias or subquery"""
    return func.to_jsonb(from_clause.table_valued(), type_=JSONB)


def row_to_json(from_clause):
    return func.to_json(from_clause.table_valued(), type_=JSON)


def strip_nulls(expr):
    return func.jsonb_strip_nulls(expr, type_=JSONB)


def json_array_from(stmt: Select):
    """
    Scalar subquery aggregating every row of `stmt` into a JSON array.
    Yields '[]' rather than null when `stmt` returns no rows.
    """
    agg = stmt.subquery("agg")
    return (
        select(func.coalesce(func.json_agg(agg.table_valued()), literal_column("'[]'"), type_=JSON))
        .select_from(agg)
        .scalar_subquery()
    )


def json_object_from(stmt: Select):
    """Scalar subquery turning the first row of `stmt` into a JSON object, or null"""
    obj = stmt.subquery("obj")
    return select(func.to_json(obj.table_valued(), type_=JSON)).select_from(obj).scalar_subquery()
