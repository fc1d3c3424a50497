import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "traintrack"),
}

# Base URL of the front-end; QR codes point at "<base>#/attend/<ws>/<training>".
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000/")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = bool(int(os.getenv("DEBUG", "0")))

# Apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
