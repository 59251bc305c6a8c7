# inzozi/adapters/outbound/mail/templates.py

"""HTML bodies for the account emails. Every interpolated value is escaped."""

from datetime import datetime
from html import escape
from typing import Tuple

_LAYOUT = """
<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
        .button {{ display: inline-block; background: #2563eb; color: #ffffff; padding: 12px 24px;
                   border-radius: 6px; text-decoration: none; }}
        .credentials {{ background: #f3f4f6; padding: 16px; border-radius: 6px; font-family: monospace; }}
        .footer {{ margin-top: 32px; font-size: 12px; color: #6b7280; }}
    </style>
</head>
<body>
    <div class="container">
        {content}
        <p class="footer">InzoziSchool. If you did not expect this email, you can ignore it.</p>
    </div>
</body>
</html>
"""


def _render(content: str) -> str:
    return _LAYOUT.format(content=content)


def welcome_email(first_name: str, email: str, password: str, role: str, login_url: str) -> Tuple[str, str]:
    """Credentials for an account created by a manager."""
    subject = "Welcome to InzoziSchool - Your Account Details"
    content = f"""
        <h2>Welcome, {escape(first_name)}!</h2>
        <p>An account with the role <strong>{escape(role)}</strong> has been created for you.</p>
        <div class="credentials">
            Email: {escape(email)}<br>
            Temporary password: {escape(password)}
        </div>
        <p>Please sign in and change your password as soon as possible.</p>
        <p><a class="button" href="{escape(login_url, quote=True)}">Sign in</a></p>
    """
    return subject, _render(content)


def reset_link_email(first_name: str, reset_url: str, expires_at: datetime) -> Tuple[str, str]:
    """Self-service reset: link carrying the single-use ticket."""
    subject = "InzoziSchool - Password Reset Request"
    content = f"""
        <h2>Hello {escape(first_name)},</h2>
        <p>We received a request to reset your password. The link below can be used once
        and expires at {escape(expires_at.strftime('%H:%M %Z'))}.</p>
        <p><a class="button" href="{escape(reset_url, quote=True)}">Reset password</a></p>
    """
    return subject, _render(content)


def admin_reset_email(first_name: str, password: str, role: str) -> Tuple[str, str]:
    """Password reset performed by a manager."""
    subject = "InzoziSchool - Your Password Has Been Reset"
    content = f"""
        <h2>Hello {escape(first_name)},</h2>
        <p>Your {escape(role)} account password was reset by an administrator.</p>
        <div class="credentials">New temporary password: {escape(password)}</div>
        <p>Please sign in and change it as soon as possible.</p>
    """
    return subject, _render(content)
