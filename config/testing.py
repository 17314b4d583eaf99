import os
import tempfile

SECRET_KEY = "test-secret"
JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
JWT_EXPIRES_DAYS = 1

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_portal_test"),
}

UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), "school_portal_uploads")
MAX_CONTENT_LENGTH = 1024 * 1024

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

PRINCIPAL_NAME = "Principal"
PRINCIPAL_EMAIL = "principal@test.local"
PRINCIPAL_PASSWORD = "Principal123"
