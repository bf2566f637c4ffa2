from sqlalchemy import Column, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from pgvector.sqlalchemy import Vector

from core.config import SMART_SEARCH_DIMENSION
from core.database import Base


class SmartSearch(Base):
    __tablename__ = "smart_search"

    asset_id = Column(UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True)
    embedding = Column(Vector(SMART_SEARCH_DIMENSION), nullable=False)
