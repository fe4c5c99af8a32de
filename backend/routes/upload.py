# backend/routes/upload.py
import logging
import os
import random
import time
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.media import MediaFile
from models.users import User
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
import schemas.upload as upload_schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])

ALLOWED_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
MAX_FILES = 10
CHUNK_SIZE = 1024 * 1024


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _unique_name(field: str, original: str) -> str:
    # Timestamp plus random suffix keeps concurrent uploads apart
    ext = Path(original or "").suffix.lower()
    return f"{field}-{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}{ext}"


def _store(db: Session, file: UploadFile, field: str, user: User) -> MediaFile:
    if file.content_type not in ALLOWED_TYPES:
        raise HTTPException(status_code=400, detail="Only image files are allowed (JPEG, PNG, GIF, WebP)")

    filename = _unique_name(field, file.filename)
    save_path = upload_dir() / filename
    size = 0
    try:
        with open(save_path, "wb") as buffer:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > settings.MAX_UPLOAD_BYTES:
                    raise HTTPException(status_code=400, detail="File too large")
                buffer.write(chunk)
    except HTTPException:
        save_path.unlink(missing_ok=True)
        raise
    except OSError as e:
        save_path.unlink(missing_ok=True)
        logger.error("Could not save upload %s: %s", filename, e)
        raise HTTPException(status_code=500, detail="File save error")
    finally:
        file.file.close()

    media = MediaFile(
        filename=filename,
        original_name=file.filename or filename,
        mimetype=file.content_type,
        size=size,
        path=str(save_path),
        url=f"/uploads/{filename}",
        uploaded_by=user.id,
    )
    db.add(media)
    return media


def _as_uploaded(media: MediaFile) -> dict:
    return {"url": media.url, "filename": media.filename, "original_name": media.original_name, "size": media.size}


@router.post("/single", response_model=upload_schemas.SingleUploadResponse)
def upload_single(
    request: Request,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    media = _store(db, image, "image", current_user)
    db.commit()
    db.refresh(media)
    write_log(db, user_id=current_user.id, action="UPLOAD", resource="media",
              ip=client_ip(request), meta={"files": [media.filename]})
    return {"success": True, **_as_uploaded(media)}


@router.post("/multiple", response_model=upload_schemas.MultipleUploadResponse)
def upload_multiple(
    request: Request,
    images: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if not images:
        raise HTTPException(status_code=400, detail="No files uploaded")
    if len(images) > MAX_FILES:
        raise HTTPException(status_code=400, detail=f"At most {MAX_FILES} files per upload")

    stored: List[MediaFile] = []
    try:
        for image in images:
            stored.append(_store(db, image, "images", current_user))
        db.commit()
    except Exception:
        # All or nothing: drop blobs written before the failure
        db.rollback()
        for media in stored:
            Path(media.path).unlink(missing_ok=True)
        raise

    write_log(db, user_id=current_user.id, action="UPLOAD", resource="media",
              ip=client_ip(request), meta={"files": [m.filename for m in stored]})
    return {"success": True, "files": [_as_uploaded(m) for m in stored]}


@router.get("/list", response_model=upload_schemas.MediaListResponse)
def list_uploads(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    files = db.query(MediaFile).order_by(MediaFile.created_at.desc(), MediaFile.id.desc()).all()
    return {"success": True, "files": files}


@router.delete("/{filename}")
def delete_upload(
    filename: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if os.path.basename(filename) != filename or filename in ("", ".", ".."):
        raise HTTPException(status_code=400, detail="Invalid filename")

    media = db.query(MediaFile).filter(MediaFile.filename == filename).first()
    if not media:
        raise HTTPException(status_code=404, detail="File not found")

    path = Path(media.path)
    db.delete(media)
    db.commit()
    # The row is gone; a missing blob is only worth a warning
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Upload %s had no file on disk", filename)

    write_log(db, user_id=current_user.id, action="UPLOAD_DELETE", resource="media",
              ip=client_ip(request), meta={"filename": filename})
    return {"success": True, "message": "File deleted successfully"}
