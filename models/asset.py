"""
Asset model for PostgreSQL
One row per managed photo/video; soft-deleted via deleted_at (trash)
"""
import enum
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, LargeBinary, ForeignKey, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base


class AssetType(str, enum.Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    OTHER = "OTHER"


ASSET_CHECKSUM_CONSTRAINT = "UQ_assets_owner_checksum"


class Asset(Base):
    __tablename__ = "assets"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())
    device_asset_id = Column(String(255), nullable=False)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    library_id = Column(UUID(as_uuid=True), ForeignKey("libraries.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=True)
    device_id = Column(String(255), nullable=False)
    type = Column(String(16), nullable=False)  # AssetType

    # File locations (preview/thumbnail paths live in asset_files)
    original_path = Column(Text, nullable=False)
    original_file_name = Column(String(512), nullable=False)
    sidecar_path = Column(Text, nullable=True)
    encoded_video_path = Column(Text, nullable=True, default="")
    checksum = Column(LargeBinary, nullable=False)  # sha1 of the original file
    thumbhash = Column(LargeBinary, nullable=True)
    duration = Column(String(32), nullable=True)

    # Flags
    is_favorite = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    is_offline = Column(Boolean, default=False, nullable=False)
    is_visible = Column(Boolean, default=True, nullable=False)
    is_external = Column(Boolean, default=False, nullable=False)

    # Relations
    live_photo_video_id = Column(UUID(as_uuid=True), ForeignKey("assets.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True)
    stack_id = Column(
        UUID(as_uuid=True),
        ForeignKey("asset_stack.id", ondelete="SET NULL", onupdate="CASCADE", use_alter=True, name="FK_assets_stack_id"),
        nullable=True,
    )

    # Timestamps
    file_created_at = Column(DateTime(timezone=True), nullable=False)
    file_modified_at = Column(DateTime(timezone=True), nullable=False)
    local_date_time = Column(DateTime(timezone=False), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("owner_id", "library_id", "checksum", name=ASSET_CHECKSUM_CONSTRAINT),
        Index("idx_asset_file_created_at", "file_created_at"),
        Index("IDX_assets_stack_id", "stack_id"),
    )

    def __repr__(self):
        return f"<Asset(id={self.id}, type={self.type}, path={self.original_path})>"
