"""
EXIF metadata, one row per asset
"""
from sqlalchemy import Column, String, Text, DateTime, Integer, BigInteger, Float, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from core.database import Base


class Exif(Base):
    __tablename__ = "exif"

    asset_id = Column(UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True)

    # Camera
    make = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    lens_model = Column(String(255), nullable=True)
    f_number = Column(Float, nullable=True)
    focal_length = Column(Float, nullable=True)
    iso = Column(Integer, nullable=True)
    exposure_time = Column(String(32), nullable=True)

    # Image
    exif_image_width = Column(Integer, nullable=True)
    exif_image_height = Column(Integer, nullable=True)
    file_size_in_byte = Column(BigInteger, nullable=True)
    orientation = Column(String(16), nullable=True)
    projection_type = Column(String(32), nullable=True)
    profile_description = Column(Text, nullable=True)
    colorspace = Column(String(64), nullable=True)
    bits_per_sample = Column(Integer, nullable=True)
    fps = Column(Float, nullable=True)
    rating = Column(Integer, nullable=True)
    description = Column(Text, nullable=False, default="")
    live_photo_cid = Column(String(255), nullable=True, index=True)
    auto_stack_id = Column(String(255), nullable=True, index=True)

    # Time
    date_time_original = Column(DateTime(timezone=True), nullable=True)
    modify_date = Column(DateTime(timezone=True), nullable=True)
    time_zone = Column(String(64), nullable=True)

    # Location
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    city = Column(String(255), nullable=True, index=True)
    state = Column(String(255), nullable=True)
    country = Column(String(255), nullable=True)
