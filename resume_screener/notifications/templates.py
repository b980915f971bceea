"""Candidate notification email templates."""

from datetime import datetime
from html import escape

from resume_screener.models import Candidate

SHORTLIST_SUBJECT = "Resume Shortlisted"
REJECTION_SUBJECT = "Application Update - Thank You"

_HTML_WRAPPER = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background-color: #f5f5f5;
            margin: 0;
            padding: 20px;
            color: #333;
        }}
        .container {{
            max-width: 600px;
            margin: 0 auto;
            background: #fff;
            border-radius: 8px;
            overflow: hidden;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }}
        .header {{
            background: {accent};
            color: white;
            padding: 20px 24px;
        }}
        .header h1 {{
            margin: 0;
            font-size: 20px;
            font-weight: 600;
        }}
        .content {{
            padding: 24px;
            line-height: 1.5;
        }}
        .score {{
            font-size: 15px;
            font-weight: 600;
        }}
        .footer {{
            background: #fafafa;
            padding: 16px 24px;
            font-size: 12px;
            color: #999;
            border-top: 1px solid #eee;
        }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header"><h1>{title}</h1></div>
        <div class="content">
            {body}
        </div>
        <div class="footer">{signature}</div>
    </div>
</body>
</html>"""


def _paragraphs_to_html(text: str) -> str:
    blocks = [b for b in text.split("\n\n") if b.strip()]
    return "\n            ".join(
        "<p>" + escape(block).replace("\n", "<br>") + "</p>" for block in blocks
    )


def _wrap_html(title: str, text_body: str, signature: str, accent: str) -> str:
    return _HTML_WRAPPER.format(
        title=escape(title),
        body=_paragraphs_to_html(text_body),
        signature=escape(signature),
        accent=accent,
    )


def render_shortlist_email(candidate: Candidate, signature: str = "HR Team") -> tuple[str, str, str]:
    """Render the positive notification.

    Returns (subject, text_body, html_body).
    """
    matched = candidate.matched_skills or "none listed"
    text = (
        f"Hi {candidate.name},\n\n"
        "Congratulations! Your resume has been shortlisted for our position.\n\n"
        f"Your matching score: {candidate.match_score:.1f}%\n"
        f"Matched skills: {matched}\n\n"
        "We'll contact you soon with next steps.\n\n"
        f"Best regards,\n{signature}"
    )
    return SHORTLIST_SUBJECT, text, _wrap_html(SHORTLIST_SUBJECT, text, signature, "#2e7d32")


def render_rejection_email(
    candidate: Candidate, threshold: float, signature: str = "HR Team"
) -> tuple[str, str, str]:
    """Render the rejection notification.

    Returns (subject, text_body, html_body).
    """
    text = (
        f"Hi {candidate.name},\n\n"
        "Thank you for applying. After evaluating your resume, "
        f"your score was {candidate.match_score:.1f}%, which is below our "
        f"shortlisting threshold of {threshold:.1f}%.\n\n"
        "Although you were not shortlisted this time, we truly appreciate your interest "
        "and encourage you to apply for future opportunities with us.\n\n"
        f"Best regards,\n{signature}"
    )
    return REJECTION_SUBJECT, text, _wrap_html(REJECTION_SUBJECT, text, signature, "#1a73e8")


def render_test_email() -> tuple[str, str, str]:
    """Render a test email to verify delivery configuration."""
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    subject = f"Resume Screener - Test Email ({now})"
    text = (
        "This is a test email from Resume Screener.\n\n"
        "If you received this, your email configuration is working correctly.\n\n"
        f"Sent at: {now}"
    )
    return subject, text, _wrap_html("Resume Screener - Test Email", text, "Resume Screener", "#1a73e8")
