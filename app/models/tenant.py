"""Tenant profile."""
from sqlalchemy import Column, Integer, String, Boolean, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class VacateStatus(str, enum.Enum):
    none = "none"
    pending = "pending"
    approved = "approved"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    id_number = Column(String(50), nullable=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    photo_url = Column(String(500), nullable=True)

    vacate_date = Column(DateTime(timezone=True), nullable=True)
    vacate_status = Column(SQLEnum(VacateStatus), nullable=False, default=VacateStatus.none)
    deposit_refunded = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # A tenant occupies at most one apartment
    apartment = relationship("Apartment", back_populates="tenant", uselist=False)
    payments = relationship("Payment", back_populates="tenant", order_by="Payment.id")
    tickets = relationship("Ticket", back_populates="tenant", order_by="Ticket.id")
