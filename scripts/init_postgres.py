"""
Initialize PostgreSQL database schema
Creates the extensions and all tables defined in models
"""
import sys
import os

# Add parent directory to path to import backend modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import logger
from core.database import Base, init_db


def init_database():
    """Create all tables in the database"""
    logger.info("Creating PostgreSQL tables...")

    try:
        init_db()
    except Exception as e:
        logger.error(f"✗ Error creating tables: {e}")
        sys.exit(1)

    logger.info("✓ Tables created successfully!")
    for name in sorted(Base.metadata.tables):
        logger.info(f"  - {name}")


if __name__ == "__main__":
    init_database()
