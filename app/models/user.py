"""Login identity. The role says which profile table ref_id points into."""
from sqlalchemy import Column, Integer, String, Enum as SQLEnum, DateTime
from sqlalchemy.sql import func
from app.database import Base
import enum


class UserRole(str, enum.Enum):
    tenant = "tenant"
    landlord = "landlord"
    caretaker = "caretaker"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False)

    # Tenant.id, Landlord.id or Caretaker.id depending on role; null once the profile is deleted
    ref_id = Column(Integer, nullable=True)

    password_reset_token = Column(String(128), nullable=True)
    password_reset_expires = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
