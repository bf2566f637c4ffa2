"""
User model for PostgreSQL
Owners of assets, libraries, albums and people
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, BigInteger
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, server_default=func.gen_random_uuid())

    # Basic info
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False, default="")
    profile_image_path = Column(Text, nullable=False, default="")
    storage_label = Column(String(255), nullable=True, unique=True)

    # Account status
    is_admin = Column(Boolean, default=False, nullable=False)
    should_change_password = Column(Boolean, default=True, nullable=False)

    # Usage and limits
    quota_size_in_bytes = Column(BigInteger, nullable=True)
    quota_usage_in_bytes = Column(BigInteger, default=0, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
