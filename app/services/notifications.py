"""Notification service (Mailgun/SendGrid email, optional SMS)."""
import logging

from app.config import get_settings

log = logging.getLogger("uvicorn.error")


def send_email(to_email: str, subject: str, html_content: str, text_content: str | None = None) -> bool:
    """Send email via Mailgun (preferred) or SendGrid. Returns False when nothing was sent."""
    settings = get_settings()
    has_key = bool(settings.mailgun_api_key)
    has_domain = bool(settings.mailgun_domain)
    if has_key and has_domain:
        log.info("[Email] Calling Mailgun API: to=%s subject=%s domain=%s", to_email, subject, settings.mailgun_domain)
        return _send_email_mailgun(to_email, subject, html_content, text_content=text_content, settings=settings)
    if settings.sendgrid_api_key:
        return _send_email_sendgrid(to_email, subject, html_content, text_content=text_content, settings=settings)
    # No transport configured: keep the message visible in the server log
    log.info("[MAIL:FALLBACK] to=%s subject=%s text=%s", to_email, subject, text_content or "")
    return False


def mail_configured() -> bool:
    s = get_settings()
    return bool((s.mailgun_api_key and s.mailgun_domain) or s.sendgrid_api_key)


MAILGUN_US_BASE = "https://api.mailgun.net"
MAILGUN_EU_BASE = "https://api.eu.mailgun.net"


def _send_email_mailgun(to_email: str, subject: str, html_content: str, text_content: str | None = None, settings=None):
    if settings is None:
        settings = get_settings()
    try:
        import httpx

        base = (settings.mailgun_base_url or MAILGUN_US_BASE).strip().rstrip("/")
        domain = (settings.mailgun_domain or "").strip().lower()
        from_addr = (settings.mailgun_from_email or "").strip()
        from_domain = from_addr.split("@")[-1].lower() if "@" in from_addr else ""
        if domain and from_domain != domain:
            from_addr = f"noreply@{domain}"
        from_email = f"{settings.mailgun_from_name} <{from_addr}>"
        url = f"{base}/v3/{domain}/messages"
        data = {
            "from": from_email,
            "to": to_email,
            "subject": subject,
            "text": text_content or "",
            "html": html_content or "",
        }
        with httpx.Client(timeout=10.0) as client:
            r = client.post(url, auth=("api", settings.mailgun_api_key), data=data)
            if 200 <= r.status_code < 300:
                log.info("[Mailgun] API success: to=%s status=%s", to_email, r.status_code)
                return True
            if r.status_code == 401 and base == MAILGUN_US_BASE:
                log.info("[Mailgun] 401 with US endpoint. Retrying with EU endpoint...")
                url_eu = f"{MAILGUN_EU_BASE}/v3/{domain}/messages"
                r2 = client.post(url_eu, auth=("api", settings.mailgun_api_key), data=data)
                if 200 <= r2.status_code < 300:
                    log.info("[Mailgun] API success (EU): to=%s", to_email)
                    return True
                log.warning("[Mailgun] EU request failed: status=%s body=%s", r2.status_code, r2.text[:500])
                return False
            log.warning("[Mailgun] API failed: status=%s to=%s body=%s", r.status_code, to_email, r.text[:500])
            return False
    except Exception as e:
        log.warning("[Mailgun] Exception: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False


def _send_email_sendgrid(to_email: str, subject: str, html_content: str, text_content: str | None = None, settings=None) -> bool:
    if settings is None:
        settings = get_settings()
    try:
        from sendgrid import SendGridAPIClient
        from sendgrid.helpers.mail import Mail

        message = Mail(
            from_email=(settings.sendgrid_from_email, settings.sendgrid_from_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
            plain_text_content=text_content or "",
        )
        sg = SendGridAPIClient(settings.sendgrid_api_key)
        sg.send(message)
        return True
    except Exception as e:
        log.warning("[SendGrid] Exception: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False


def send_password_reset_email(to_email: str, reset_url: str) -> bool:
    subject = "Reset your password"
    text = f"Click the link to reset your password: {reset_url}"
    html = f"""
    <p>Click the link to reset your password:</p>
    <p><a href="{reset_url}">{reset_url}</a></p>
    <p>If you did not request this, you can ignore this email.</p>
    """
    return send_email(to_email, subject, html, text_content=text)


def send_rent_reminder_email(to_email: str, title: str, message: str, tenant_name: str | None = None) -> bool:
    name = (tenant_name or "").strip() or "there"
    html = f"""
    <p>Hi {name},</p>
    <p>{message}</p>
    """
    return send_email(to_email, title, html, text_content=message)


def send_sms(to_phone: str, body: str) -> bool:
    """Optional SMS via Twilio."""
    settings = get_settings()
    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        return False
    try:
        from twilio.rest import Client
        client = Client(settings.twilio_account_sid, settings.twilio_auth_token)
        client.messages.create(body=body, from_=settings.twilio_from_phone_number, to=to_phone)
        return True
    except Exception as e:
        log.warning("[SMS] Twilio send failed: to=%s error=%s", to_phone, e)
        return False
