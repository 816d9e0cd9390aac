import logging
import smtplib

from snipers.core.config import Settings

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Your Crypto Snipers verification code"
OTP_BODY = "Your verification code is {code}. It expires in {minutes} minutes."


def send_otp(settings: Settings, email: str, code: str) -> None:
    """Deliver a signup code. ``log`` mode only writes it to the server log."""
    if settings.otp_delivery == "email":
        body = OTP_BODY.format(code=code, minutes=settings.otp_ttl_seconds // 60)
        _send_email(settings, email, OTP_SUBJECT, body)
        logger.info("OTP mailed to %s", email)
    else:
        logger.info("OTP for %s: %s", email, code)


def _send_email(settings: Settings, recipient: str, subject: str, body: str) -> None:
    message = f"From: {settings.smtp_from}\r\nTo: {recipient}\r\nSubject: {subject}\r\n\r\n{body}"

    use_ssl = settings.smtp_port == 465
    if use_ssl:
        smtp = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=10.0)
    else:
        smtp = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10.0)
        if settings.smtp_use_tls:
            smtp.starttls()
    try:
        if settings.smtp_username:
            smtp.login(settings.smtp_username, settings.smtp_password)
        smtp.sendmail(settings.smtp_from, [recipient], message)
    finally:
        smtp.quit()
