"""
Asset search query composition for PostgreSQL
Predicate helpers, relation attachers and the search query builder.
Nothing here touches the database; callers execute the returned statements.
"""
from functools import reduce
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import String, and_, any_, case, cast, distinct, exists, func, literal, literal_column, or_, select
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID, Insert
from sqlalchemy.sql import Join, Select
from pgvector.sqlalchemy import Vector

from core.config import logger
from models.album import Album, albums_assets
from models.asset import Asset
from models.asset_face import AssetFace
from models.asset_file import AssetFile, AssetFileType
from models.asset_stack import AssetStack
from models.exif import Exif
from models.library import Library
from models.person import Person
from models.search import AssetSearchOptions
from models.smart_search import SmartSearch
from models.user import User
from utils.pg_json import json_array_from, json_object_from, row_to_json, row_to_jsonb, strip_nulls

assets = Asset.__table__
exif = Exif.__table__
asset_faces = AssetFace.__table__
person = Person.__table__
users = User.__table__
libraries = Library.__table__
asset_stack = AssetStack.__table__
albums = Album.__table__
smart_search = SmartSearch.__table__
asset_files = AssetFile.__table__


# ---- Predicate helpers ----

def optional_between(column, from_=None, to=None):
    """
    Allows optional bounds unlike a plain BETWEEN: uses >= or <= when only one
    bound is given and returns None (no constraint) when neither is.
    """
    if from_ is not None and to is not None:
        return column.between(from_, to)
    if from_ is not None:
        return column >= from_
    if to is not None:
        return column <= to
    return None


def as_uuid(value):
    """Bound value cast to uuid; malformed ids fail in the database, not here."""
    return cast(literal(str(value), String), UUID(as_uuid=False))


def any_uuid(values: Sequence):
    return any_(cast(literal([str(v) for v in values], ARRAY(String)), ARRAY(UUID(as_uuid=False))))


def as_vector(embedding: Sequence[float]):
    return cast(literal("[" + ",".join(repr(float(v)) for v in embedding) + "]", String), Vector())


# ---- Upsert column registry ----

def get_upsert_columns(stmt: Insert, pk: str) -> Dict[str, object]:
    """
    Map every declared column except `pk` to its `excluded.<column>` value.
    Columns come from the model metadata, so the list is fixed at import time.
    """
    return {column.name: stmt.excluded[column.name] for column in stmt.table.columns if column.name != pk}


def map_upsert_columns(columns: Dict[str, object], entry: Dict[str, object]) -> Dict[str, object]:
    return {key: columns[key] for key in entry}


# ---- Join deduplication ----

def joined_names(qb: Select) -> set:
    """Names of every table/alias/CTE already present in the statement's FROM clause"""
    names = set()
    pending = list(qb.get_final_froms())
    while pending:
        from_ = pending.pop()
        if isinstance(from_, Join):
            pending.extend((from_.left, from_.right))
        else:
            names.add(getattr(from_, "name", None))
    return names


def _existing_join(qb: Select, name: str) -> Optional[Join]:
    pending = list(qb.get_final_froms())
    while pending:
        from_ = pending.pop()
        if isinstance(from_, Join):
            if getattr(from_.right, "name", None) == name:
                return from_
            pending.append(from_.left)
    return None


class DeduplicateJoins:
    """
    Every join of a search query goes through this object, which skips a join
    already present with the same kind and ON clause. A second join of the
    same target with a different kind or ON clause raises ValueError rather
    than being dropped. Stateless; one shared instance.
    """

    def join(self, qb: Select, target, onclause, isouter: bool = False) -> Select:
        if target.name not in joined_names(qb):
            return qb.join(target, onclause, isouter=isouter)
        existing = _existing_join(qb, target.name)
        if existing is None:
            # target is a plain FROM entry (the base table)
            return qb
        if existing.isouter != isouter or not existing.onclause.compare(onclause):
            kind = "LEFT" if isouter else "INNER"
            raise ValueError(f"conflicting {kind} join on {target.name}: already joined differently")
        return qb

    def left_join(self, qb: Select, target, onclause) -> Select:
        return self.join(qb, target, onclause, isouter=True)

    def inner_join(self, qb: Select, target, onclause) -> Select:
        return self.join(qb, target, onclause, isouter=False)


join_deduplication = DeduplicateJoins()


# ---- Relation attachers ----

def with_exif(qb: Select) -> Select:
    return join_deduplication.left_join(qb, exif, exif.c.asset_id == assets.c.id).add_columns(
        strip_nulls(row_to_jsonb(exif)).label("exifInfo")
    )


def with_smart_search(qb: Select, inner: bool) -> Select:
    # inner when having an embedding is itself a filter, left when it is only projected
    qb = join_deduplication.join(qb, smart_search, smart_search.c.asset_id == assets.c.id, isouter=not inner)
    return qb.add_columns(smart_search.c.embedding)


def with_faces():
    return json_array_from(
        select(asset_faces).where(asset_faces.c.asset_id == assets.c.id).correlate(assets)
    ).label("faces")


def with_faces_and_people():
    face = row_to_jsonb(asset_faces)
    face_with_person = case(
        (person.c.id.is_not(None), func.jsonb_insert(face, literal_column("'{person}'::text[]"), row_to_jsonb(person), type_=JSONB)),
        else_=face,
    )
    return (
        select(func.coalesce(func.jsonb_agg(face_with_person), literal_column("'[]'::jsonb"), type_=JSONB))
        .select_from(asset_faces.outerjoin(person, person.c.id == asset_faces.c.person_id))
        .where(asset_faces.c.asset_id == assets.c.id)
        .correlate(assets)
        .scalar_subquery()
        .label("faces")
    )


def with_owner():
    return json_object_from(select(users).where(users.c.id == assets.c.owner_id).correlate(assets)).label("owner")


def with_library():
    return json_object_from(
        select(libraries).where(libraries.c.id == assets.c.library_id).correlate(assets)
    ).label("library")


def with_stack(qb: Select, stacked_assets: bool, with_deleted: bool = False) -> Select:
    """
    Keep stack primaries and unstacked assets, projecting the stack row.
    With `stacked_assets`, also aggregate the other members of the stack.
    """
    qb = (
        join_deduplication.left_join(qb, asset_stack, asset_stack.c.primary_asset_id == assets.c.id)
        .add_columns(row_to_json(asset_stack).label("stack"))
        .where(or_(asset_stack.c.primary_asset_id == assets.c.id, assets.c.stack_id.is_(None)))
    )
    if not stacked_assets:
        return qb

    stacked = assets.alias("stacked")
    siblings = (
        select(func.coalesce(func.json_agg(strip_nulls(row_to_jsonb(stacked))), literal_column("'[]'::json")))
        .select_from(stacked)
        .where(stacked.c.stack_id == asset_stack.c.id)
        .where(stacked.c.id != asset_stack.c.primary_asset_id)
        .correlate(asset_stack)
    )
    if not with_deleted:
        siblings = siblings.where(stacked.c.deleted_at.is_(None))
    return qb.add_columns(siblings.scalar_subquery().label("stackedAssets"))


def with_albums(qb: Select, album_id: Optional[str] = None) -> Select:
    """Project the asset's albums; with `album_id`, also keep only members of that album."""
    album_rows = (
        select(albums)
        .join(
            albums_assets,
            and_(albums.c.id == albums_assets.c.albums_id, albums_assets.c.assets_id == assets.c.id),
        )
        .correlate(assets)
    )
    if album_id:
        album_rows = album_rows.where(albums.c.id == as_uuid(album_id))
    qb = qb.add_columns(json_array_from(album_rows).label("albums"))
    if album_id:
        qb = qb.where(
            exists()
            .where(albums_assets.c.assets_id == assets.c.id)
            .where(albums_assets.c.albums_id == as_uuid(album_id))
        )
    return qb


# ---- People membership ----

def has_people_cte(person_ids: Sequence[str]):
    """Assets whose faces cover every requested person"""
    return (
        select(asset_faces.c.asset_id)
        .where(asset_faces.c.person_id == any_uuid(person_ids))
        .group_by(asset_faces.c.asset_id)
        .having(func.count(distinct(asset_faces.c.person_id)) >= len(set(person_ids)))
        .cte("valid")
    )


def has_people(person_ids: Optional[Sequence[str]] = None) -> Select:
    """Base selection of every asset column, restricted to `person_ids` when given"""
    if not person_ids:
        return select(assets)
    valid = has_people_cte(person_ids)
    return join_deduplication.inner_join(select(assets), valid, valid.c.asset_id == assets.c.id)


# ---- Search query builder ----

Step = Tuple[bool, Callable[[Select], Select]]


def _where_exif(qb: Select, clause) -> Select:
    return join_deduplication.left_join(qb, exif, exif.c.asset_id == assets.c.id).where(clause)


def _has_file(file_type: AssetFileType, path: str):
    return (
        exists()
        .where(asset_files.c.asset_id == assets.c.id)
        .where(asset_files.c.type == file_type.value)
        .where(asset_files.c.path == path)
    )


def _is_encoded(encoded: bool):
    if encoded:
        return and_(assets.c.encoded_video_path.is_not(None), assets.c.encoded_video_path != "")
    return or_(assets.c.encoded_video_path.is_(None), assets.c.encoded_video_path == "")


def _range_step(column, from_, to) -> Step:
    clause = optional_between(column, from_, to)
    return clause is not None, lambda qb: qb.where(clause)


def search_asset_builder(options: AssetSearchOptions) -> Select:
    """
    Compose one SELECT over assets from a sparse set of filters.

    Archived assets are excluded unless `is_archived` or `with_archived` says
    otherwise; soft-deleted assets are excluded unless `with_deleted` is set or
    a trash-date bound is given. Strings and lists only filter when non-empty;
    boolean filters apply whenever they are not None.
    """
    is_archived = options.effective_is_archived
    with_deleted = options.include_deleted
    person_ids: List[str] = list(dict.fromkeys(options.person_ids or []))

    steps: List[Step] = [
        _range_step(assets.c.created_at, options.created_after, options.created_before),
        _range_step(assets.c.updated_at, options.updated_after, options.updated_before),
        _range_step(assets.c.deleted_at, options.trashed_after, options.trashed_before),
        _range_step(assets.c.file_created_at, options.taken_after, options.taken_before),
        (bool(options.city), lambda qb: _where_exif(qb, exif.c.city == options.city)),
        (bool(options.state), lambda qb: _where_exif(qb, exif.c.state == options.state)),
        (bool(options.country), lambda qb: _where_exif(qb, exif.c.country == options.country)),
        (bool(options.lens_model), lambda qb: _where_exif(qb, exif.c.lens_model == options.lens_model)),
        (bool(options.make), lambda qb: _where_exif(qb, exif.c.make == options.make)),
        (bool(options.model), lambda qb: _where_exif(qb, exif.c.model == options.model)),
        (bool(options.checksum), lambda qb: qb.where(assets.c.checksum == options.checksum)),
        (bool(options.device_asset_id), lambda qb: qb.where(assets.c.device_asset_id == options.device_asset_id)),
        (bool(options.device_id), lambda qb: qb.where(assets.c.device_id == options.device_id)),
        (bool(options.id), lambda qb: qb.where(assets.c.id == as_uuid(options.id))),
        (bool(options.library_id), lambda qb: qb.where(assets.c.library_id == as_uuid(options.library_id))),
        (bool(options.user_ids), lambda qb: qb.where(assets.c.owner_id == any_uuid(options.user_ids))),
        (bool(options.encoded_video_path), lambda qb: qb.where(assets.c.encoded_video_path == options.encoded_video_path)),
        (bool(options.original_path), lambda qb: qb.where(assets.c.original_path == options.original_path)),
        (bool(options.preview_path), lambda qb: qb.where(_has_file(AssetFileType.PREVIEW, options.preview_path))),
        (bool(options.thumbnail_path), lambda qb: qb.where(_has_file(AssetFileType.THUMBNAIL, options.thumbnail_path))),
        (
            bool(options.original_file_name),
            lambda qb: qb.where(
                func.f_unaccent(assets.c.original_file_name).ilike(func.f_unaccent(options.original_file_name))
            ),
        ),
        (options.is_favorite is not None, lambda qb: qb.where(assets.c.is_favorite == options.is_favorite)),
        (options.is_offline is not None, lambda qb: qb.where(assets.c.is_offline == options.is_offline)),
        (options.is_visible is not None, lambda qb: qb.where(assets.c.is_visible == options.is_visible)),
        (bool(options.type), lambda qb: qb.where(assets.c.type == options.type)),
        (is_archived is not None, lambda qb: qb.where(assets.c.is_archived == is_archived)),
        (options.is_encoded is not None, lambda qb: qb.where(_is_encoded(options.is_encoded))),
        (
            options.is_motion is not None,
            lambda qb: qb.where(
                assets.c.live_photo_video_id.is_not(None) if options.is_motion else assets.c.live_photo_video_id.is_(None)
            ),
        ),
        (options.is_not_in_album, lambda qb: qb.where(~exists().where(albums_assets.c.assets_id == assets.c.id))),
        (bool(options.album_id) or options.with_albums, lambda qb: with_albums(qb, options.album_id)),
        (options.with_exif, with_exif),
        (
            bool(options.with_faces or options.with_people or person_ids),
            lambda qb: qb.add_columns(with_faces_and_people()),
        ),
        (options.with_owner, lambda qb: qb.add_columns(with_owner())),
        (options.with_library, lambda qb: qb.add_columns(with_library())),
        (options.with_stacked, lambda qb: with_stack(qb, stacked_assets=True, with_deleted=with_deleted)),
        (not with_deleted, lambda qb: qb.where(assets.c.deleted_at.is_(None))),
    ]

    applied = [transform for predicate, transform in steps if predicate]
    logger.debug(f"[search] composing asset query: {len(applied)} of {len(steps)} steps, people={len(person_ids)}")
    return reduce(lambda qb, transform: transform(qb), applied, has_people(person_ids))
