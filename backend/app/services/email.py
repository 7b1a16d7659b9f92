import html
import logging
import smtplib
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

APP_NAME = "Applytrack"


def _render_action_email(
    first_name: str,
    heading: str,
    intro: str,
    button_label: str,
    url: str,
    expiry_note: str,
    footer: str,
) -> tuple[str, str]:
    """Build the HTML and plain-text bodies for an emailed action link."""
    safe_name = html.escape(first_name or "there")
    safe_url = html.escape(url)

    html_body = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .button {{
                display: inline-block;
                padding: 12px 24px;
                background-color: #2b6cb0;
                color: white;
                text-decoration: none;
                border-radius: 4px;
                margin: 20px 0;
            }}
            .footer {{ color: #666; font-size: 12px; margin-top: 30px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>{heading}</h1>
            <p>Hi {safe_name},</p>
            <p>{intro}</p>
            <a href="{safe_url}" class="button">{button_label}</a>
            <p>Or copy and paste this link into your browser:</p>
            <p style="word-break: break-all;">{safe_url}</p>
            <p>{expiry_note}</p>
            <div class="footer">
                <p>{footer}</p>
            </div>
        </div>
    </body>
    </html>
    """

    text_body = f"""
    {heading}

    Hi {first_name or "there"},

    {intro}

    {url}

    {expiry_note}

    {footer}
    """
    return html_body, text_body


def send_verification_email(to_email: str, first_name: str, token: str) -> bool:
    """Send an email verification link to the user.

    Returns True if email was sent successfully, False otherwise.
    """
    verification_url = f"{settings.app_url}/api/auth/verify-email/{token}"
    html_body, text_body = _render_action_email(
        first_name,
        heading=f"Welcome to {APP_NAME}!",
        intro="Thank you for signing up. Please verify your email address to activate your account.",
        button_label="Verify Email Address",
        url=verification_url,
        expiry_note=f"This link will expire in {settings.verify_email_token_ttl_hours} hour(s).",
        footer=f"If you didn't create an account with {APP_NAME}, you can safely ignore this email.",
    )
    return _send_email(to_email, f"Verify your {APP_NAME} account", html_body, text_body)


def send_password_reset_email(to_email: str, first_name: str, token: str) -> bool:
    """Send a password reset link. Returns True on success."""
    reset_url = f"{settings.frontend_url}/reset-password?token={token}"
    html_body, text_body = _render_action_email(
        first_name,
        heading="Reset your password",
        intro=f"We received a request to reset the password for your {APP_NAME} account.",
        button_label="Reset Password",
        url=reset_url,
        expiry_note=f"This link will expire in {settings.reset_password_token_ttl_hours} hour(s).",
        footer="If you didn't request this, you can safely ignore this email.",
    )
    return _send_email(to_email, f"{APP_NAME} - Reset your password", html_body, text_body)


def send_account_deletion_email(to_email: str, first_name: str, token: str) -> bool:
    """Send the link that confirms permanent account deletion. Returns True on success."""
    confirm_url = f"{settings.frontend_url}/confirm-delete?token={token}"
    html_body, text_body = _render_action_email(
        first_name,
        heading="Confirm account deletion",
        intro=(
            "We received a request to delete your account. Confirming will permanently remove "
            "your profile, job applications and interviews."
        ),
        button_label="Delete My Account",
        url=confirm_url,
        expiry_note=f"This link will expire in {settings.delete_account_token_ttl_hours} hours.",
        footer="If you didn't request this, ignore this email and your account will stay as it is.",
    )
    return _send_email(to_email, f"{APP_NAME} - Confirm account deletion", html_body, text_body)


def send_interview_reminder_email(
    to_email: str,
    first_name: str,
    position_name: str,
    employer_name: str,
    interview_date: datetime,
    interview_type: str | None = None,
    location: str | None = None,
) -> bool:
    """Remind the user about an interview scheduled for tomorrow.

    Returns True if email was sent successfully, False otherwise.
    """
    safe_name = html.escape(first_name or "there")
    safe_position = html.escape(position_name)
    safe_employer = html.escape(employer_name)
    safe_type = html.escape(interview_type) if interview_type else "Not specified"
    safe_location = html.escape(location) if location else "Not specified"
    when = interview_date.strftime("%A, %d %B %Y at %H:%M")

    subject = f"Reminder: interview with {employer_name} tomorrow"

    html_body = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .info-table td {{ padding: 8px 12px; border-bottom: 1px solid #e2e8f0; }}
            .info-table td:first-child {{ font-weight: 600; color: #4a5568; width: 30%; }}
            .footer {{ color: #666; font-size: 12px; margin-top: 30px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>Interview tomorrow</h1>
            <p>Hi {safe_name}, this is a reminder about your upcoming interview.</p>
            <table class="info-table">
                <tr><td>Position</td><td><strong>{safe_position}</strong></td></tr>
                <tr><td>Employer</td><td>{safe_employer}</td></tr>
                <tr><td>When</td><td>{when}</td></tr>
                <tr><td>Type</td><td>{safe_type}</td></tr>
                <tr><td>Location</td><td>{safe_location}</td></tr>
            </table>
            <div class="footer">
                <p>Good luck! This is an automated reminder from {APP_NAME}.</p>
            </div>
        </div>
    </body>
    </html>
    """

    text_body = f"""
Interview tomorrow - {APP_NAME}
==============================

Position: {position_name}
Employer: {employer_name}
When: {when}
Type: {interview_type or 'Not specified'}
Location: {location or 'Not specified'}

Good luck!
"""

    return _send_email(to_email, subject, html_body, text_body)


def _send_email(to_email: str, subject: str, html_body: str, text_body: str) -> bool:
    """Send an email via SMTP. Returns True on success."""
    if not settings.smtp_user or not settings.smtp_password:
        logger.warning("SMTP credentials not configured, skipping email send")
        return False

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.from_email or settings.smtp_user
    msg["To"] = to_email

    msg.attach(MIMEText(text_body, "plain"))
    msg.attach(MIMEText(html_body, "html"))

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=15) as server:
            server.starttls()
            server.login(settings.smtp_user, settings.smtp_password)
            server.send_message(msg)
        logger.info(f"Email sent to {to_email}: {subject[:50]}")
        return True
    except Exception:
        logger.exception(f"Failed to send email to {to_email}")
        return False
