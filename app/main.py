"""Rental Management System – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.database import Base, db_health, engine
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from app import models  # noqa: F401
from app.routers import admin, auth, landlords, notices, payments, public, reports, tenants, tickets, uploads

settings = get_settings()
log = logging.getLogger("uvicorn.error")
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves the API as {"error": "<message>"}
@app.exception_handler(StarletteHTTPException)
def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
def unhandled_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Server error"})


app.include_router(auth.router)
app.include_router(tenants.router)
app.include_router(landlords.router)
app.include_router(payments.router)
app.include_router(tickets.router)
app.include_router(notices.router)
app.include_router(uploads.router)
app.include_router(public.router)
app.include_router(reports.router)
app.include_router(admin.router)
if settings.enable_dev_routes:
    from app.routers import dev
    app.include_router(dev.router)

Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.on_event("startup")
def startup():
    if settings.mailgun_api_key and settings.mailgun_domain:
        log.info("Mailgun configured: domain=%s from=%s", settings.mailgun_domain, settings.mailgun_from_email)
    elif settings.sendgrid_api_key:
        log.info("SendGrid configured: from=%s", settings.sendgrid_from_email)
    else:
        log.info("No mail transport configured; emails are logged instead of sent")
    if settings.enable_dev_routes:
        log.warning("Dev routes enabled (/api/dev); do not use in production")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        log.warning("Database startup failed (tables not created). Check DATABASE_URL. Error: %s", e)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/api/health")
def health():
    return {"status": "ok", "db_state": db_health()}
