"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User, UserRole
from app.models.tenant import Tenant, VacateStatus
from app.models.landlord import Landlord
from app.models.estate import Estate, Apartment
from app.models.caretaker import Caretaker
from app.models.payment import Payment, PaymentStatus, PaymentMethod
from app.models.ticket import Ticket, TicketStatus
from app.models.notice import Notice, NoticeType
from app.models.caretaker_invite import CaretakerInvite

# Backup/restore order: a model only references models listed before it
MODELS_IN_DEPENDENCY_ORDER = {
    "User": User,
    "Tenant": Tenant,
    "Landlord": Landlord,
    "Estate": Estate,
    "Apartment": Apartment,
    "Caretaker": Caretaker,
    "Ticket": Ticket,
    "Payment": Payment,
    "Notice": Notice,
    "CaretakerInvite": CaretakerInvite,
}

__all__ = [
    "User",
    "UserRole",
    "Tenant",
    "VacateStatus",
    "Landlord",
    "Estate",
    "Apartment",
    "Caretaker",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "Ticket",
    "TicketStatus",
    "Notice",
    "NoticeType",
    "CaretakerInvite",
    "MODELS_IN_DEPENDENCY_ORDER",
]
