"""Estate notice board."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_current_user
from app.models import Notice, User
from app.schemas.notice import NoticeResponse

router = APIRouter(prefix="/api/notices", tags=["notices"])


@router.get("/estate/{estate_id}", response_model=list[NoticeResponse])
def estate_notices(
    estate_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notices = db.query(Notice).filter(Notice.estate_id == estate_id).order_by(Notice.id.desc()).all()
    return [NoticeResponse.model_validate(n) for n in notices]
