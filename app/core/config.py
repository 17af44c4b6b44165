# app/core/config.py

import os
from dotenv import load_dotenv
from app.utils.logger import get_logger

logger = get_logger(__name__)

load_dotenv()

# =====================================================
# APPLICATION
# =====================================================
APP_ENV = os.getenv("APP_ENV")
if APP_ENV not in {"development", "staging", "production"}:
    raise ValueError("APP_ENV must be development | staging | production")

IS_PRODUCTION = APP_ENV == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if APP_ENV == "development" else "INFO").upper()

# =====================================================
# DATABASE
# =====================================================
DB_TYPE = os.getenv("DB_TYPE")
if DB_TYPE not in {"postgres", "sqlite"}:
    raise ValueError("DB_TYPE must be postgres | sqlite")

if DB_TYPE == "postgres":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise ValueError("DATABASE_URL is required for Postgres")

elif DB_TYPE == "sqlite":
    if IS_PRODUCTION:
        raise ValueError("SQLite is NOT allowed in production")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./studio.db")

# ---- Pool tuning (safe defaults) ----
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 10))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 20))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", 30))
DB_ECHO_POOL = os.getenv("DB_ECHO_POOL", "false").lower() == "true"

# ---- SSL ----
DB_SSL_VERIFY = os.getenv("DB_SSL_VERIFY", "true").lower() == "true"
if IS_PRODUCTION and not DB_SSL_VERIFY:
    logger.warning("Running in production with relaxed SSL verification")

# =====================================================
# SESSION TOKENS
# =====================================================
JWT_ACCESS_SECRET_KEY = os.getenv("JWT_ACCESS_SECRET_KEY")
if not JWT_ACCESS_SECRET_KEY:
    raise ValueError("JWT_ACCESS_SECRET_KEY must be set")

JWT_ALGORITHM = "HS256"

ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 12 * 60)
)

# =====================================================
# GOOGLE OAUTH (single allow-listed admin)
# =====================================================
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
GOOGLE_CERTS_URL = os.getenv(
    "GOOGLE_CERTS_URL", "https://www.googleapis.com/oauth2/v3/certs"
)
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "").strip().lower()
if not ADMIN_EMAIL:
    raise ValueError("ADMIN_EMAIL must be set")

if not GOOGLE_CLIENT_ID:
    logger.warning("GOOGLE_CLIENT_ID is not set; Google sign-in will be rejected")

# =====================================================
# STUDIO / DOCUMENTS
# =====================================================
STUDIO_NAME = os.getenv("STUDIO_NAME", "AURA KNOT PHOTOGRAPHY")
STUDIO_TAGLINE = os.getenv(
    "STUDIO_TAGLINE", "Professional Photography & Videography Services"
)
STUDIO_CONTACT = os.getenv("STUDIO_CONTACT", "")

QUOTATION_PREFIX = os.getenv("QUOTATION_PREFIX", "Q-AKP")
ORDER_PREFIX = os.getenv("ORDER_PREFIX", "ORD-AKP")

# =====================================================
# HTTP
# =====================================================
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
