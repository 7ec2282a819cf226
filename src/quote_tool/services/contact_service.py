"""
Contact Service - stores contact form messages and notifies the team.
"""
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import ContactMessage
from ..errors import NotificationError, PersistenceError
from .notifier import EmailNotifier

PREVIEW_LENGTH = 100


class ContactService:
    """Saves contact submissions; notification failures never undo a save."""

    def __init__(self, notifier: EmailNotifier):
        self.notifier = notifier

    def submit(
        self,
        db: Session,
        name: str,
        email: str,
        message: str,
        company: Optional[str] = None,
    ) -> ContactMessage:
        record = ContactMessage(
            name=name,
            email=email,
            company=company or None,
            message=message,
        )

        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save contact message from {email}: {e}")
            raise PersistenceError("Failed to save contact message") from e

        logger.info(
            f"New contact form submission: id={record.id}, name={name!r}, email={email!r}, "
            f"company={record.company or 'N/A'!r}, message={message[:PREVIEW_LENGTH]!r}"
        )

        try:
            self.notifier.send_contact_notification(
                name=record.name,
                email=record.email,
                company=record.company,
                message=record.message,
                created_at=record.created_at,
            )
        except NotificationError as e:
            # message is already stored
            logger.warning(f"Email notification failed for contact {record.id}: {e}")

        return record
