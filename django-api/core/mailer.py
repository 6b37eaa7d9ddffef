"""Outgoing email.

Email is a side effect of purchases and payouts: delivery failures are
logged and reported as False, never raised into the calling operation.
"""

import logging
from abc import ABC, abstractmethod
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import mail_admins, send_mail

logger = logging.getLogger(__name__)


class Mailer(ABC):
    @abstractmethod
    def send(self, to: list[str], subject: str, body: str) -> bool:
        ...

    @abstractmethod
    def send_admins(self, subject: str, body: str) -> bool:
        ...


class DjangoMailer(Mailer):
    """Mailer using Django's configured EMAIL_BACKEND."""

    def send(self, to: list[str], subject: str, body: str) -> bool:
        recipients = [address for address in to if address]
        if not recipients:
            return False
        try:
            send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, recipients)
        except (SMTPException, OSError):
            logger.exception("Failed to send %r to %s", subject, recipients)
            return False
        return True

    def send_admins(self, subject: str, body: str) -> bool:
        try:
            mail_admins(subject, body)
        except (SMTPException, OSError):
            logger.exception("Failed to notify admins: %r", subject)
            return False
        return True
