import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_core_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/tmp/attendance_core_test_uploads")
DEFAULT_TIME_ZONE = "Asia/Kolkata"

FACE_MATCH_THRESHOLD = 0.60
DESCRIPTOR_CACHE_SIZE = 50
DEFAULT_GEOFENCE_RADIUS_M = 3000.0
PHOTO_WRITER_WORKERS = 1
MAX_PHOTO_BYTES = 8 * 1024 * 1024
