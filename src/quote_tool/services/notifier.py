"""
Email Notifier - forwards contact submissions to the external email worker.

The worker takes a JSON body and authenticates with an ``X-API-Key`` header.
When the URL or key is not configured, sending is skipped.
"""
from datetime import datetime
from typing import Optional

import requests
from loguru import logger

from ..config.settings import get_settings, Settings
from ..errors import NotificationError


class EmailNotifier:
    """HTTP client for the email worker."""

    def __init__(self, url: Optional[str], api_key: Optional[str], timeout: float = 10.0):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'EmailNotifier':
        settings = settings or get_settings()
        return cls(
            url=settings.email_worker_url,
            api_key=settings.email_worker_api_key,
            timeout=settings.email_worker_timeout,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.url and self.api_key)

    def send_contact_notification(
        self,
        name: str,
        email: str,
        message: str,
        created_at: datetime,
        company: Optional[str] = None,
    ) -> bool:
        """
        Post a contact submission to the email worker.

        Returns:
            True when sent, False when skipped because the worker is not configured

        Raises:
            NotificationError: transport failure or a non-2xx response
        """
        if not self.enabled:
            logger.debug("Email sending skipped: no EMAIL_WORKER_URL or EMAIL_WORKER_API_KEY configured")
            return False

        payload = {
            "name": name,
            "email": email,
            "company": company,
            "message": message,
            "createdAt": created_at.isoformat(),
        }
        logger.info(f"Sending email notification to worker: name={name!r}, email={email!r}")

        try:
            response = requests.post(
                self.url,
                json=payload,
                headers={"X-API-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NotificationError(f"Email worker unreachable: {e}") from e

        if not response.ok:
            raise NotificationError(
                f"Email worker responded with {response.status_code}: {response.reason}"
            )

        logger.info(f"Email notification sent: status={response.status_code}, name={name!r}")
        return True
