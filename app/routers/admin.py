"""Admin: full JSON backup and all-or-nothing restore."""
import json
import logging
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_landlord
from app.models import User
from app.services.backup import dump_all, restore_all

router = APIRouter(prefix="/api/admin", tags=["admin"])
log = logging.getLogger("uvicorn.error")

BACKUP_FILENAME = "rms-backup.json"


@router.get("/backup")
def backup(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    payload = dump_all(db)
    log.info("Backup downloaded by user %s", current_user.id)
    return Response(
        content=json.dumps(payload, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{BACKUP_FILENAME}"'},
    )


@router.post("/restore")
def restore(
    payload=Body(None),
    confirm: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    """Replace all data with a backup. Everything is applied in one transaction or nothing is."""
    if (confirm or "").lower() != "true":
        raise HTTPException(status_code=400, detail="Add ?confirm=true to proceed")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid backup payload")
    try:
        counts = restore_all(db, payload)
        db.commit()
    except Exception as e:
        db.rollback()
        log.warning("Restore by user %s rolled back: %s", current_user.id, e)
        return JSONResponse(status_code=500, content={"error": str(e)})
    log.info("Restore by user %s committed", current_user.id)
    return {"message": "Restore completed", "counts": counts}
