import os

from .config import CORS_ORIGINS, DB_CONFIG, PUBLIC_BASE_URL, SECRET_KEY  # noqa: F401

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
