# inzozi/adapters/outbound/mail/resend_mailer.py

"""
Email delivery through Resend.
"""

import asyncio
import logging
from typing import Optional

import resend

from inzozi.adapters.configuration.config import settings
from inzozi.application.ports.outbound.mailer_port import IMailer

logger = logging.getLogger(__name__)


class ResendMailer(IMailer):
    """
    IMailer backed by the Resend SDK.

    Without an API key the message is logged instead of sent, which keeps
    local development working.
    """

    def __init__(self, api_key: Optional[str] = None, sender: Optional[str] = None):
        if api_key is None and settings.RESEND_API_KEY is not None:
            api_key = settings.RESEND_API_KEY.get_secret_value()
        self.api_key = api_key
        self.sender = sender or settings.EMAIL_FROM

    async def send(self, to_address: str, subject: str, body_html: str) -> bool:
        if not self.api_key:
            logger.warning("RESEND_API_KEY not set - logging email instead of sending")
            logger.info(f"EMAIL TO: {to_address} | SUBJECT: {subject}")
            return True

        params: resend.Emails.SendParams = {
            "from": self.sender,
            "to": [to_address],
            "subject": subject,
            "html": body_html,
        }

        try:
            resend.api_key = self.api_key
            # the SDK is blocking
            email = await asyncio.to_thread(resend.Emails.send, params)
            logger.info(f"Email sent to {to_address}, id: {email.get('id') if isinstance(email, dict) else email}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {to_address}: {e}")
            return False
