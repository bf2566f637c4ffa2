"""
PostgreSQL database connection and setup
Requires the pgvector extension for smart search embeddings
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from core.config import DATABASE_URL, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_ECHO, logger

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required for PostgreSQL connection")

# Create SQLAlchemy engine
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=DB_POOL_SIZE,
    max_overflow=DB_MAX_OVERFLOW,
    echo=DB_ECHO
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db():
    """
    Yield a database session and always close it afterwards.
    Usage:
        db = next(get_db())
        rows = search_metadata(db, options)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database tables
    Call this on application startup
    """
    # Register every model on Base.metadata before create_all
    from models.user import User  # noqa: F401
    from models.library import Library  # noqa: F401
    from models.asset import Asset  # noqa: F401
    from models.asset_stack import AssetStack  # noqa: F401
    from models.exif import Exif  # noqa: F401
    from models.person import Person  # noqa: F401
    from models.asset_face import AssetFace  # noqa: F401
    from models.album import Album  # noqa: F401
    from models.smart_search import SmartSearch  # noqa: F401
    from models.asset_file import AssetFile  # noqa: F401

    bind = bind or engine
    try:
        with bind.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS unaccent"))
            # Immutable wrapper so unaccent can be used in indexes and ILIKE filters
            conn.execute(text(
                "CREATE OR REPLACE FUNCTION f_unaccent(text) RETURNS text "
                "LANGUAGE sql IMMUTABLE PARALLEL SAFE STRICT "
                "AS $$ SELECT unaccent('unaccent', $1) $$"
            ))
        Base.metadata.create_all(bind=bind)
    except Exception as ex:
        logger.error(f"[database] init_db failed: {ex}")
        raise
