"""Authentication: register, login, password reset."""
import logging
from datetime import datetime, timezone
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.dependencies import get_current_user
from app.models import Caretaker, CaretakerInvite, Landlord, Tenant, User, UserRole
from app.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UserResponse,
)
from app.services.auth import (
    create_access_token,
    generate_reset_token,
    get_password_hash,
    is_expired,
    reset_token_valid,
    verify_password,
)
from app.services.notifications import mail_configured, send_password_reset_email

router = APIRouter(prefix="/api/auth", tags=["auth"])
log = logging.getLogger("uvicorn.error")

_PROFILE_MODELS = {UserRole.tenant: Tenant, UserRole.landlord: Landlord}


def _unlinked_profile(db: Session, role: UserRole, email: str):
    """Profile row with this email that no login points at yet (e.g. a tenant a landlord added)."""
    model = _PROFILE_MODELS[role]
    profile = db.query(model).filter(model.email == email).first()
    if not profile:
        return None
    linked = db.query(User).filter(User.role == role, User.ref_id == profile.id).first()
    if linked:
        raise HTTPException(status_code=400, detail="Email already registered")
    return profile


def _caretaker_from_invite(db: Session, data: RegisterRequest) -> Caretaker:
    code = (data.invite_code or "").strip().upper()
    if not code:
        raise HTTPException(status_code=400, detail="Invite code is required for caretakers")
    invite = db.query(CaretakerInvite).filter(CaretakerInvite.code == code).first()
    if not invite or invite.used_at is not None:
        raise HTTPException(status_code=400, detail="Invalid or already used invite code")
    if is_expired(invite.expires_at):
        raise HTTPException(status_code=400, detail="Invite code has expired")
    invite.used_at = datetime.now(timezone.utc)
    return Caretaker(
        name=(data.name or "").strip() or None,
        email=data.email,
        id_number=(data.id_number or "").strip() or None,
        phone=(data.phone or "").strip() or None,
        estate_id=invite.estate_id,
        apartment_id=invite.apartment_id,
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    if data.role == UserRole.caretaker:
        profile = _caretaker_from_invite(db, data)
    else:
        name = (data.name or "").strip()
        id_number = (data.id_number or "").strip()
        if not name or not id_number:
            raise HTTPException(status_code=400, detail="Name and ID number are required")
        profile = _unlinked_profile(db, data.role, data.email)
        if profile is None:
            profile = _PROFILE_MODELS[data.role](email=data.email)
        profile.name = profile.name or name
        profile.id_number = profile.id_number or id_number
        if data.phone and not profile.phone:
            profile.phone = data.phone.strip()

    try:
        db.add(profile)
        db.flush()
        user = User(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            role=data.role,
            ref_id=profile.id,
        )
        db.add(user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)
    log.info("Registered %s user id=%s ref_id=%s", user.role.value, user.id, user.ref_id)
    token = create_access_token(user.id, user.email, user.role)
    return TokenResponse(token=token, role=user.role, user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == data.email).first()
    if not user or not verify_password(data.password, user.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    token = create_access_token(user.id, user.email, user.role)
    return TokenResponse(token=token, role=user.role)


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.post("/forgot", response_model=ForgotPasswordResponse)
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Always answers the same way so the endpoint does not reveal which emails exist."""
    email = (data.email or "").strip().lower()
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    resp = ForgotPasswordResponse(message="If the email exists, a reset link was sent.")
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return resp
    token, expires = generate_reset_token()
    user.password_reset_token = token
    user.password_reset_expires = expires
    db.commit()

    base = get_settings().frontend_url.rstrip("/")
    reset_url = f"{base}/reset?{urlencode({'token': token, 'email': email})}"
    send_password_reset_email(email, reset_url)
    if not mail_configured():
        # Development aid: without a mail transport the link only reaches the server log
        resp.reset_url = reset_url
    return resp


@router.post("/reset", response_model=MessageResponse)
def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    email = (data.email or "").strip().lower()
    if not email or not data.token or not data.password:
        raise HTTPException(status_code=400, detail="Email, token and password are required")
    user = db.query(User).filter(User.email == email).first()
    if not user or not reset_token_valid(user.password_reset_token, user.password_reset_expires, data.token):
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")
    user.hashed_password = get_password_hash(data.password)
    user.password_reset_token = None
    user.password_reset_expires = None
    db.commit()
    return MessageResponse(message="Password updated")
