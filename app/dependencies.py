"""Shared dependencies: DB session, current user, role guards."""
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User, UserRole
from app.models.tenant import Tenant
from app.models.landlord import Landlord
from app.models.caretaker import Caretaker
from app.services.auth import decode_token_with_error

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="No token, authorization denied")
    token_str = (credentials.credentials or "").strip()
    payload, _ = decode_token_with_error(token_str)
    if not payload:
        raise HTTPException(status_code=401, detail="Token is not valid")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Token is not valid")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_tenant(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.tenant:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user


def require_landlord(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.landlord:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user


def require_caretaker(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.caretaker:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user


def require_staff(current_user: User = Depends(get_current_user)) -> User:
    """Landlord or caretaker."""
    if current_user.role not in (UserRole.landlord, UserRole.caretaker):
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user


def get_tenant_profile(db: Session, user: User) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.id == user.ref_id).first() if user.ref_id else None
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


def get_landlord_profile(db: Session, user: User) -> Landlord:
    landlord = db.query(Landlord).filter(Landlord.id == user.ref_id).first() if user.ref_id else None
    if not landlord:
        raise HTTPException(status_code=404, detail="Landlord profile missing")
    return landlord


def get_caretaker_profile(db: Session, user: User) -> Caretaker:
    caretaker = db.query(Caretaker).filter(Caretaker.id == user.ref_id).first() if user.ref_id else None
    if not caretaker:
        raise HTTPException(status_code=404, detail="Caretaker not found")
    return caretaker
