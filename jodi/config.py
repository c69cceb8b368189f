import os
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


# ------------------ MongoDB ------------------
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "jodi")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

# ------------------ Auth ------------------
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(24 * 60)))
ADMIN_EMAILS = {email.lower() for email in _csv(os.getenv("ADMIN_EMAILS", ""))}

# ------------------ Uploads ------------------
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))
ADMIN_MAX_PHOTOS = int(os.getenv("ADMIN_MAX_PHOTOS", "5"))
MAX_PHOTOS = int(os.getenv("MAX_PHOTOS", "4"))
PUBLIC_MIN_PHOTOS = int(os.getenv("PUBLIC_MIN_PHOTOS", "3"))

# ------------------ HTTP ------------------
CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
