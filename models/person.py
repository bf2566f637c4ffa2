import uuid
from sqlalchemy import Column, String, Text, DateTime, Date, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base


class Person(Base):
    __tablename__ = "person"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    birth_date = Column(Date, nullable=True)
    thumbnail_path = Column(Text, nullable=False, default="")
    is_hidden = Column(Boolean, default=False, nullable=False)
    face_asset_id = Column(UUID(as_uuid=True), ForeignKey("asset_faces.id", ondelete="SET NULL", use_alter=True, name="FK_person_face_asset_id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
