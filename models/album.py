"""
Album models
Albums hold assets through the albums_assets_assets join table
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Table, PrimaryKeyConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base


albums_assets = Table(
    "albums_assets_assets",
    Base.metadata,
    Column("albums_id", UUID(as_uuid=True), ForeignKey("albums.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True),
    Column("assets_id", UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
    PrimaryKeyConstraint("albums_id", "assets_id", name="PK_albums_assets"),
)


class Album(Base):
    __tablename__ = "albums"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)
    album_name = Column(String(255), nullable=False, default="Untitled Album")
    description = Column(Text, nullable=False, default="")
    album_thumbnail_asset_id = Column(UUID(as_uuid=True), ForeignKey("assets.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True)
    is_activity_enabled = Column(Boolean, default=True, nullable=False)
    order = Column(String(8), default="desc", nullable=False)  # 'asc' or 'desc'

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Album(id={self.id}, name={self.album_name})>"
