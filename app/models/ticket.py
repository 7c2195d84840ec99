"""Maintenance tickets raised by tenants."""
from sqlalchemy import Column, Integer, Text, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class TicketStatus(str, enum.Enum):
    open = "open"
    in_progress = "in-progress"
    closed = "closed"


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="SET NULL"), nullable=True, index=True)

    description = Column(Text, nullable=True)
    status = Column(SQLEnum(TicketStatus), nullable=False, default=TicketStatus.open)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tenant = relationship("Tenant", back_populates="tickets")
    apartment = relationship("Apartment", back_populates="tickets")
