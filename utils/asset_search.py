"""
Asset search execution
Runs builder output on a caller-supplied session; never opens sessions itself
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import SEARCH_DEFAULT_PAGE_SIZE, SEARCH_MAX_PAGE_SIZE, logger
from models.search import AssetSearchOptions
from utils.database import assets, search_asset_builder


OrderDirection = Literal["asc", "desc"]


class SearchPage(BaseModel):
    items: List[Dict[str, Any]]
    next_page: Optional[int] = None


def search_metadata(
    db: Session,
    options: AssetSearchOptions,
    page: int = 1,
    size: int = SEARCH_DEFAULT_PAGE_SIZE,
    order_direction: OrderDirection = "desc",
) -> SearchPage:
    """
    Paginated metadata search ordered by capture time.
    Fetches one extra row to know whether another page exists.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if size < 1 or size > SEARCH_MAX_PAGE_SIZE:
        raise ValueError(f"size must be between 1 and {SEARCH_MAX_PAGE_SIZE}")
    if order_direction not in ("asc", "desc"):
        raise ValueError("order_direction must be 'asc' or 'desc'")

    if order_direction == "asc":
        ordering = (assets.c.file_created_at.asc(), assets.c.id.asc())
    else:
        ordering = (assets.c.file_created_at.desc(), assets.c.id.desc())

    stmt = search_asset_builder(options).order_by(*ordering).limit(size + 1).offset((page - 1) * size)
    try:
        rows = db.execute(stmt).mappings().all()
    except SQLAlchemyError as ex:
        logger.error(f"[search] metadata search failed: {ex}")
        db.rollback()
        raise

    has_next = len(rows) > size
    items = [dict(row) for row in rows[:size]]
    logger.info(f"[search] metadata search returned {len(items)} rows (page={page} size={size})")
    return SearchPage(items=items, next_page=page + 1 if has_next else None)


def get_asset_by_id(
    db: Session,
    asset_id: str,
    with_exif: bool = True,
    with_faces: bool = False,
    with_stacked: bool = False,
    with_owner: bool = False,
) -> Optional[Dict[str, Any]]:
    """Single asset, archived or trashed included, with the requested relations"""
    options = AssetSearchOptions(
        id=asset_id,
        with_archived=True,
        with_deleted=True,
        with_exif=with_exif,
        with_people=with_faces,
        with_stacked=with_stacked,
        with_owner=with_owner,
    )
    try:
        row = db.execute(search_asset_builder(options)).mappings().first()
    except SQLAlchemyError as ex:
        logger.error(f"[search] lookup of asset {asset_id} failed: {ex}")
        db.rollback()
        raise
    return dict(row) if row else None
