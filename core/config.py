import os
import logging
from dotenv import load_dotenv

# Load .env from project root
try:
    load_dotenv(dotenv_path=os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".env")))
except Exception:
    load_dotenv()

# Database
DATABASE_URL = (os.getenv("DATABASE_URL", "") or "").strip().strip('"').strip("'")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "20"))
DB_ECHO = (os.getenv("DB_ECHO", "") or "").strip().lower() in ("1", "true", "yes")

# Search paging
SEARCH_DEFAULT_PAGE_SIZE = int(os.getenv("SEARCH_DEFAULT_PAGE_SIZE", "250"))
SEARCH_MAX_PAGE_SIZE = int(os.getenv("SEARCH_MAX_PAGE_SIZE", "1000"))

# Width of the CLIP embeddings stored in smart_search
SMART_SEARCH_DIMENSION = int(os.getenv("SMART_SEARCH_DIMENSION", "512"))

# Logging
LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger("mediasearch")
