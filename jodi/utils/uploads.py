import logging
import os
import time
import uuid
from typing import Iterable, List

from fastapi import HTTPException, UploadFile

from jodi import config

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def upload_dir() -> str:
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    return config.UPLOAD_DIR


def photo_path(filename: str) -> str:
    # stored names never contain directories
    if not filename or os.path.basename(filename) != filename:
        raise HTTPException(status_code=400, detail="Invalid photo filename")
    return os.path.join(upload_dir(), filename)


def _unique_name(original: str) -> str:
    ext = os.path.splitext(original or "")[1].lower()
    return f"photos-{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}{ext}"


def _save_one(upload: UploadFile) -> str:
    if not (upload.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed!")

    filename = _unique_name(upload.filename)
    path = photo_path(filename)
    written = 0
    with open(path, "wb") as out:
        while True:
            chunk = upload.file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > config.MAX_PHOTO_BYTES:
                break
            out.write(chunk)

    if written > config.MAX_PHOTO_BYTES:
        os.remove(path)
        limit_mb = config.MAX_PHOTO_BYTES // (1024 * 1024)
        raise HTTPException(status_code=400, detail=f"File too large. Maximum size is {limit_mb}MB.")
    return filename


def save_photos(uploads: Iterable[UploadFile]) -> List[str]:
    """Store every upload under UPLOAD_DIR; nothing is kept if one of them is rejected."""
    saved = []
    try:
        for upload in uploads:
            saved.append(_save_one(upload))
    except Exception:
        delete_photos(saved)
        raise
    logger.info("📸 Saved photos: %s", saved)
    return saved


def delete_photos(filenames: Iterable[str]):
    for filename in filenames:
        path = os.path.join(upload_dir(), os.path.basename(filename))
        try:
            os.remove(path)
            logger.info("🗑️ Deleted photo: %s", filename)
        except FileNotFoundError:
            logger.warning("Photo already missing on disk: %s", filename)
