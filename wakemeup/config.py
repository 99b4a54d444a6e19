# wakemeup/config.py
import os
from dotenv import load_dotenv

# load .env file automatically
load_dotenv()

DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_USER = os.getenv("DB_USER", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "#Root1234")
DB_NAME = os.getenv("DB_NAME", "wakemeup")
# Full SQLAlchemy URL, takes precedence over the DB_* values when set
DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
# Unset means requests queue for a pooled connection without a deadline
DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT")) if os.getenv("DB_POOL_TIMEOUT") else None

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))

# HS256 keys under 32 bytes make PyJWT warn on every encode and decode
DEFAULT_JWT_SECRET = "dev_secret_change_me_before_production"
JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ENABLE_DEBUG_ROUTES = os.getenv("ENABLE_DEBUG_ROUTES", "true").lower() in ("1", "true", "yes")
