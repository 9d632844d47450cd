import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_core"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/attendance_core/uploads/images")
DEFAULT_TIME_ZONE = os.getenv("DEFAULT_TIME_ZONE", "Asia/Kolkata")

FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.60"))
DESCRIPTOR_CACHE_SIZE = int(os.getenv("DESCRIPTOR_CACHE_SIZE", "500"))
DEFAULT_GEOFENCE_RADIUS_M = float(os.getenv("DEFAULT_GEOFENCE_RADIUS_M", "3000"))
PHOTO_WRITER_WORKERS = int(os.getenv("PHOTO_WRITER_WORKERS", "4"))
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(8 * 1024 * 1024)))
