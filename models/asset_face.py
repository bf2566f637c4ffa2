"""
Detected face regions; person_id stays null until the face is recognized/assigned
"""
import uuid
from sqlalchemy import Column, String, Integer, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base


class AssetFace(Base):
    __tablename__ = "asset_faces"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())
    asset_id = Column(UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    person_id = Column(UUID(as_uuid=True), ForeignKey("person.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True)

    image_width = Column(Integer, nullable=False, default=0)
    image_height = Column(Integer, nullable=False, default=0)
    bounding_box_x1 = Column(Integer, nullable=False, default=0)
    bounding_box_y1 = Column(Integer, nullable=False, default=0)
    bounding_box_x2 = Column(Integer, nullable=False, default=0)
    bounding_box_y2 = Column(Integer, nullable=False, default=0)
    source_type = Column(String(32), nullable=False, default="machine-learning")

    __table_args__ = (
        Index("IDX_asset_faces_asset_id_person_id", "asset_id", "person_id"),
        Index("IDX_asset_faces_person_id", "person_id"),
    )
