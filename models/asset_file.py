"""
Asset file model
Generated files (preview, thumbnail) per asset; replaces the old
assets.preview_path / assets.thumbnail_path columns
"""
import enum
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base


class AssetFileType(str, enum.Enum):
    PREVIEW = "preview"
    THUMBNAIL = "thumbnail"


class AssetFile(Base):
    __tablename__ = "asset_files"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())
    asset_id = Column(
        UUID(as_uuid=True),
        ForeignKey("assets.id", ondelete="CASCADE", onupdate="CASCADE", name="FK_asset_files_asset_id"),
        nullable=False,
    )
    type = Column(String(32), nullable=False)  # AssetFileType
    path = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # At most one file of a given type per asset
    __table_args__ = (
        Index("UQ_assetId_type", "asset_id", "type", unique=True),
    )

    def to_dict(self):
        return {
            "id": str(self.id),
            "assetId": str(self.asset_id),
            "type": self.type,
            "path": self.path,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "deletedAt": self.deleted_at.isoformat() if self.deleted_at else None,
        }
