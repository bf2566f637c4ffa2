"""
Move preview/thumbnail paths off the assets table into asset_files

up:   create asset_files, copy non-empty legacy paths, drop assets.preview_path/thumbnail_path
down: re-add the columns, copy paths back (one row per asset and type), drop asset_files
"""
from sqlalchemy import text
from sqlalchemy.engine import Connection

from core.config import logger

NAME = "AddAssetFilesTable1723859965844"

# (file type, legacy column, column DDL used by down)
LEGACY_COLUMNS = (
    ("preview", "preview_path", "character varying"),
    ("thumbnail", "thumbnail_path", "character varying DEFAULT ''"),
)


def up(conn: Connection) -> None:
    conn.execute(text(
        'CREATE TABLE "asset_files" ('
        '"id" uuid NOT NULL DEFAULT gen_random_uuid(), '
        '"asset_id" uuid NOT NULL, '
        '"created_at" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(), '
        '"updated_at" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(), '
        '"deleted_at" TIMESTAMP WITH TIME ZONE, '
        '"type" character varying NOT NULL, '
        '"path" character varying NOT NULL, '
        'CONSTRAINT "PK_asset_files_id" PRIMARY KEY ("id"))'
    ))
    conn.execute(text('CREATE UNIQUE INDEX "UQ_assetId_type" ON "asset_files" ("asset_id", "type")'))
    conn.execute(text(
        'ALTER TABLE "asset_files" ADD CONSTRAINT "FK_asset_files_asset_id" '
        'FOREIGN KEY ("asset_id") REFERENCES "assets"("id") ON DELETE CASCADE ON UPDATE CASCADE'
    ))

    for file_type, column, _ in LEGACY_COLUMNS:
        moved = conn.execute(text(
            f'INSERT INTO "asset_files" ("asset_id", "type", "path") '
            f'SELECT "id", :file_type, "{column}" FROM "assets" '
            f'WHERE "{column}" IS NOT NULL AND "{column}" != \'\''
        ), {"file_type": file_type}).rowcount
        conn.execute(text(f'ALTER TABLE "assets" DROP COLUMN "{column}"'))
        logger.info(f"[migration] {NAME} up: moved {moved} {file_type} paths")


def down(conn: Connection) -> None:
    for file_type, column, ddl in LEGACY_COLUMNS:
        conn.execute(text(f'ALTER TABLE "assets" ADD "{column}" {ddl}'))
        restored = conn.execute(text(
            f'UPDATE "assets" SET "{column}" = "asset_files"."path" FROM "asset_files" '
            f'WHERE "assets"."id" = "asset_files"."asset_id" AND "asset_files"."type" = :file_type'
        ), {"file_type": file_type}).rowcount
        logger.info(f"[migration] {NAME} down: restored {restored} {file_type} paths")

    conn.execute(text('ALTER TABLE "asset_files" DROP CONSTRAINT "FK_asset_files_asset_id"'))
    conn.execute(text('DROP TABLE "asset_files"'))
