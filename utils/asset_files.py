"""
Generated asset files (preview/thumbnail), one per asset and type
"""
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import logger
from models.asset_file import AssetFile, AssetFileType
from utils.database import as_uuid, get_upsert_columns, map_upsert_columns


def upsert_asset_file_statement(asset_id: str, file_type: AssetFileType, path: str):
    entry = {"asset_id": asset_id, "type": AssetFileType(file_type).value, "path": path}
    stmt = insert(AssetFile.__table__).values(**entry)
    columns = get_upsert_columns(stmt, "id")
    return stmt.on_conflict_do_update(
        index_elements=["asset_id", "type"],
        set_={**map_upsert_columns(columns, entry), "updated_at": func.now(), "deleted_at": None},
    )


def upsert_asset_file(db: Session, asset_id: str, file_type: AssetFileType, path: str) -> None:
    """Insert the file, or repoint (and restore) the existing file of the same type"""
    try:
        db.execute(upsert_asset_file_statement(asset_id, file_type, path))
        db.commit()
        logger.debug(f"[asset_files] {AssetFileType(file_type).value} for {asset_id} -> {path}")
    except SQLAlchemyError as ex:
        db.rollback()
        logger.error(f"[asset_files] upsert failed for {asset_id}: {ex}")
        raise


def get_asset_files(db: Session, asset_id: str, with_deleted: bool = False) -> List[AssetFile]:
    stmt = select(AssetFile).where(AssetFile.asset_id == as_uuid(asset_id)).order_by(AssetFile.type)
    if not with_deleted:
        stmt = stmt.where(AssetFile.deleted_at.is_(None))
    return list(db.execute(stmt).scalars().all())


def get_asset_file_path(db: Session, asset_id: str, file_type: AssetFileType) -> Optional[str]:
    stmt = (
        select(AssetFile.path)
        .where(AssetFile.asset_id == as_uuid(asset_id))
        .where(AssetFile.type == AssetFileType(file_type).value)
        .where(AssetFile.deleted_at.is_(None))
    )
    return db.execute(stmt).scalar_one_or_none()
