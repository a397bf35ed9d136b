"""
Configuration settings for the User Record Store
"""

import os
import logging
from typing import List
from urllib.parse import quote
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def build_database_url(host: str, port: int, user: str, password: str, database: str) -> str:
    """Build a PostgreSQL DSN from individual connection options"""
    credentials = quote(user, safe="")
    if password:
        credentials = f"{credentials}:{quote(password, safe='')}"
    return f"postgresql://{credentials}@{host}:{port}/{database}"


def parse_origins(raw: str) -> List[str]:
    """Split a comma separated origin list, dropping blanks"""
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def parse_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Environment configuration
ENV = os.getenv("ENV", "development")

# Database connection options
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", 5432))
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "student")
DATABASE_URL = os.getenv("DATABASE_URL") or build_database_url(DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME)
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5001))

# CORS settings
ALLOWED_ORIGINS = parse_origins(os.getenv("ALLOWED_ORIGINS", "*"))

# Answer 404 instead of an echo when UPDATE/DELETE match no row
REPORT_MISSING_RECORDS = parse_flag(os.getenv("REPORT_MISSING_RECORDS", "false"))

logger.info(f"Environment: {ENV}")
logger.info(f"Database: {DB_NAME} on {DB_HOST}:{DB_PORT}")
