from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.schemas.property import ApartmentResponse, EstateResponse
from app.schemas.tenant import TenantMe, TenantResponse
from app.schemas.landlord import CaretakerMe, LandlordMe
from app.schemas.payment import PaymentResponse
from app.schemas.ticket import TicketDetail, TicketResponse
from app.schemas.notice import NoticeResponse
