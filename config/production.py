import os

from .config import CORS_ORIGINS, DB_CONFIG, LOG_LEVEL, PUBLIC_BASE_URL  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
