"""Email delivery via Resend (HTTP) or SMTP."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from resume_screener.config import EmailConfig

logger = logging.getLogger("resume_screener.notifications")


def _from_header(config: EmailConfig) -> str:
    return formataddr((config.sender_name, config.sender_email)) if config.sender_name else config.sender_email


def _send_via_resend(config: EmailConfig, to_address: str, subject: str, text_body: str, html_body: str) -> None:
    import resend

    resend.api_key = config.resend_api_key
    resend.Emails.send({
        "from": _from_header(config),
        "to": [to_address],
        "subject": subject,
        "text": text_body,
        "html": html_body,
    })


def _send_via_smtp(config: EmailConfig, to_address: str, subject: str, text_body: str, html_body: str) -> None:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = _from_header(config)
    msg["To"] = to_address
    msg.attach(MIMEText(text_body, "plain"))
    msg.attach(MIMEText(html_body, "html"))

    with smtplib.SMTP(config.smtp_server, config.smtp_port, timeout=30) as server:
        server.ehlo()
        server.starttls()
        server.ehlo()
        server.login(config.sender_email, config.sender_password)
        server.sendmail(config.sender_email, to_address, msg.as_string())


def send_email(
    config: EmailConfig,
    to_address: str,
    subject: str,
    text_body: str,
    html_body: str,
) -> bool:
    """Send a multipart email. Resend is used when an API key is configured.

    Returns True on success, False on failure.
    """
    if not config.sender_email:
        logger.error("Sender email not configured")
        return False

    if not to_address:
        logger.error("No recipient address for '%s'", subject)
        return False

    if not config.resend_api_key and not config.sender_password:
        logger.error("Email credentials not configured")
        return False

    try:
        if config.resend_api_key:
            _send_via_resend(config, to_address, subject, text_body, html_body)
        else:
            _send_via_smtp(config, to_address, subject, text_body, html_body)

        logger.info("Email sent successfully to %s", to_address)
        return True

    except smtplib.SMTPAuthenticationError:
        logger.error(
            "SMTP authentication failed. Make sure you're using a Gmail App Password. "
            "See: https://support.google.com/accounts/answer/185833"
        )
        return False
    except smtplib.SMTPException as e:
        logger.error("SMTP error sending email to %s: %s", to_address, e)
        return False
    except Exception as e:
        logger.error("Unexpected error sending email to %s: %s", to_address, e)
        return False
