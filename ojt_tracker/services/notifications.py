"""
Notification dispatcher.

Every outbound email goes through a Notifier. Callers only learn whether
delivery worked; a failed send never raises, so it can never undo the
database change that triggered it.
"""
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx
import structlog

from ojt_tracker.config import settings

logger = structlog.get_logger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")


def html_to_text(html: str) -> str:
    """Crude plain-text alternative for an HTML body."""
    text = _TAG_RE.sub("", html)
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


class Notifier(ABC):
    """Base class for email delivery backends"""

    @abstractmethod
    async def send(self, recipient: str, subject: str, body: str) -> bool:
        """
        Deliver one message.

        Args:
            recipient: Email address
            subject: Subject line
            body: HTML body

        Returns:
            True if the provider accepted the message, False otherwise
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name"""
        pass


class MailerSendNotifier(Notifier):
    """MailerSend HTTP API backend"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.MAILERSEND_API_KEY
        self.api_url = api_url or settings.MAILERSEND_API_URL
        self.timeout = timeout or settings.EMAIL_TIMEOUT
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self._transport = transport

    def build_payload(self, recipient: str, subject: str, body: str) -> Dict:
        return {
            "from": {"email": self.from_email, "name": self.from_name},
            "to": [{"email": recipient}],
            "subject": subject,
            "html": body,
            "text": html_to_text(body),
        }

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        if not self.api_key:
            logger.error("email_not_configured", provider=self.name, recipient=recipient)
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self.build_payload(recipient, subject, body),
                )
                response.raise_for_status()

            logger.info("email_sent", provider=self.name, recipient=recipient, subject=subject)
            return True

        except httpx.HTTPStatusError as e:
            logger.error(
                "email_rejected",
                provider=self.name,
                recipient=recipient,
                status_code=e.response.status_code,
                response=e.response.text[:500],
            )
            return False
        except httpx.HTTPError as e:
            logger.error("email_failed", provider=self.name, recipient=recipient, error=str(e))
            return False

    @property
    def name(self) -> str:
        return "mailersend"


class LoggingNotifier(Notifier):
    """Writes messages to the log instead of sending them (no credentials configured)."""

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        logger.info(
            "email_logged",
            provider=self.name,
            recipient=recipient,
            subject=subject,
            body=html_to_text(body),
        )
        return True

    @property
    def name(self) -> str:
        return "log"


class NotifierFactory:
    """Picks the email backend from configuration"""

    _backends = {
        "mailersend": MailerSendNotifier,
        "log": LoggingNotifier,
    }

    _instance: Optional[Notifier] = None

    @classmethod
    def resolve_backend_name(cls) -> str:
        provider = (settings.EMAIL_PROVIDER or "auto").lower()
        if provider == "auto":
            return "mailersend" if settings.MAILERSEND_API_KEY else "log"
        if provider not in cls._backends:
            available = ", ".join(cls._backends.keys())
            raise ValueError(f"Unknown email provider: {provider}. Available providers: {available}")
        return provider

    @classmethod
    def get_notifier(cls) -> Notifier:
        if cls._instance is None:
            backend = cls.resolve_backend_name()
            cls._instance = cls._backends[backend]()
            logger.info("notifier_initialized", provider=backend)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def get_notifier() -> Notifier:
    """FastAPI dependency returning the configured notifier."""
    return NotifierFactory.get_notifier()


async def dispatch(notifier: Notifier, recipient: str, subject: str, body: str) -> bool:
    """Send through a notifier; an exception counts as a failed delivery."""
    try:
        return await notifier.send(recipient, subject, body)
    except Exception:
        logger.exception("notifier_error", provider=getattr(notifier, "name", "unknown"), recipient=recipient)
        return False
