"""Per-candidate shortlist / rejection notifications."""

import logging

from resume_screener.config import EmailConfig
from resume_screener.models import Candidate
from resume_screener.notifications.email_sender import send_email
from resume_screener.notifications.templates import render_rejection_email, render_shortlist_email

logger = logging.getLogger("resume_screener.notifications")


class EmailNotifier:
    """Emails each candidate the outcome of screening."""

    def __init__(self, config: EmailConfig):
        self.config = config

    def is_configured(self) -> bool:
        has_credentials = bool(self.config.sender_password or self.config.resend_api_key)
        return bool((self.config.sender_email or "").strip()) and has_credentials

    def notify(self, candidate: Candidate, threshold: float) -> bool:
        """Send a shortlist message when score >= threshold, else a rejection.

        Returns whether delivery succeeded; never raises.
        """
        signature = self.config.sender_name or "HR Team"
        if candidate.match_score >= threshold:
            subject, text, html = render_shortlist_email(candidate, signature=signature)
        else:
            subject, text, html = render_rejection_email(candidate, threshold, signature=signature)

        sent = send_email(self.config, candidate.email, subject, text, html)
        if sent:
            logger.info("Email (%s) sent to: %s", subject, candidate.email)
        else:
            logger.error("Failed to send email to: %s", candidate.email)
        return sent
