"""Notices posted to an estate (optionally addressed to one tenant)."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class NoticeType(str, enum.Enum):
    general = "general"
    rent_reminder = "rent-reminder"


class Notice(Base):
    __tablename__ = "notices"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="SET NULL"), nullable=True, index=True)  # null when posted by a caretaker
    estate_id = Column(Integer, ForeignKey("estates.id", ondelete="SET NULL"), nullable=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)

    title = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    type = Column(SQLEnum(NoticeType), nullable=False, default=NoticeType.general)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    landlord = relationship("Landlord", back_populates="notices")
    estate = relationship("Estate", back_populates="notices")
