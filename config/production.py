import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "please-set-JWT_SECRET_KEY")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_portal"),
}

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.path.dirname(os.path.dirname(__file__)), "uploads"))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(5 * 1024 * 1024)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PRINCIPAL_NAME = os.getenv("PRINCIPAL_NAME", "Principal")
PRINCIPAL_EMAIL = os.getenv("PRINCIPAL_EMAIL", "")
PRINCIPAL_PASSWORD = os.getenv("PRINCIPAL_PASSWORD", "")
