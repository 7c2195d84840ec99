"""Auth service (JWT, password hashing, reset tokens)."""
import secrets
from datetime import datetime, timedelta, timezone
import bcrypt
import jwt
from app.config import get_settings
from app.models.user import UserRole

settings = get_settings()


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def create_access_token(user_id: int, email: str, role: UserRole) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(user_id), "email": email, "role": role.value, "exp": expire}
    raw = jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return raw if isinstance(raw, str) else raw.decode("utf-8")


def decode_token(token: str) -> dict | None:
    payload, _ = decode_token_with_error(token)
    return payload


def decode_token_with_error(token: str) -> tuple[dict | None, str | None]:
    """Decode JWT; returns (payload, error_message)."""
    if not token or not isinstance(token, str):
        return None, "empty token"
    token = token.strip()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload, None
    except jwt.ExpiredSignatureError as e:
        return None, str(e)
    except jwt.PyJWTError as e:
        return None, str(e)


def generate_reset_token() -> tuple[str, datetime]:
    """Random password-reset token and its expiry."""
    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.password_reset_expire_minutes)
    return secrets.token_hex(32), expires


def is_expired(expires: datetime | None) -> bool:
    if expires is None:
        return False
    # SQLite hands back naive datetimes
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires <= datetime.now(timezone.utc)


def reset_token_valid(stored: str | None, expires: datetime | None, given: str | None) -> bool:
    if not stored or not given or not expires:
        return False
    if not secrets.compare_digest(stored, given.strip()):
        return False
    return not is_expired(expires)
