"""Profile photo uploads, stored on local disk and served under /uploads."""
import logging
import secrets
import time
from pathlib import Path
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from app.config import get_settings
from app.dependencies import get_current_user
from app.models import User

router = APIRouter(prefix="/api/uploads", tags=["uploads"])
log = logging.getLogger("uvicorn.error")

# Stored suffix follows the content type, never the client's filename
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def _stored_name(content_type: str) -> str:
    return f"pf_{int(time.time() * 1000)}_{secrets.randbelow(10**9)}{IMAGE_EXTENSIONS[content_type]}"


@router.post("/profile", status_code=201)
def upload_profile_photo(
    request: Request,
    file: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
):
    """Save an image (2 MB max) and return its public URL; the client stores it via PATCH /me."""
    settings = get_settings()
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image uploads are allowed")
    if content_type not in IMAGE_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Unsupported image type")
    try:
        content = file.file.read(settings.max_upload_bytes + 1)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Could not read file: {e!s}")
    if not content:
        raise HTTPException(status_code=400, detail="File is empty.")
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail="File too large")

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    name = _stored_name(content_type)
    (upload_dir / name).write_bytes(content)
    log.info("User %s uploaded %s (%d bytes)", current_user.id, name, len(content))

    relative = f"/uploads/{name}"
    base = settings.backend_public_url.rstrip("/") or str(request.base_url).rstrip("/")
    return {"url": f"{base}{relative}", "path": relative}
