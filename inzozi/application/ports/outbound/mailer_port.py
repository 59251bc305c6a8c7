# inzozi/application/ports/outbound/mailer_port.py

from abc import ABC, abstractmethod


class IMailer(ABC):
    """Outbound email. Implementations report failure by returning False, never by raising."""

    @abstractmethod
    async def send(self, to_address: str, subject: str, body_html: str) -> bool:
        pass
