"""Rent payments, including mock M-Pesa checkout fields."""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"
    late = "late"


class PaymentMethod(str, enum.Enum):
    cash = "cash"
    bank = "bank"
    mpesa = "mpesa"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="SET NULL"), nullable=True, index=True)

    amount = Column(Numeric(10, 2), nullable=True)
    date = Column(DateTime(timezone=True), nullable=True)
    status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.pending)
    method = Column(SQLEnum(PaymentMethod), nullable=False, default=PaymentMethod.mpesa)

    # M-Pesa (mock/sandbox)
    mpesa_phone = Column(String(50), nullable=True)
    mpesa_checkout_request_id = Column(String(64), nullable=True, index=True)
    mpesa_merchant_request_id = Column(String(64), nullable=True)
    mpesa_receipt = Column(String(64), nullable=True)
    mpesa_result_code = Column(String(10), nullable=True)
    mpesa_result_desc = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tenant = relationship("Tenant", back_populates="payments")
    apartment = relationship("Apartment", back_populates="payments")
