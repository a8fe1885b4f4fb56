"""Delivery of creation notifications.

Notifications are best effort: the write service logs and drops any failure
raised here. The web layer defers delivery until after the response.
"""
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    subject: str
    body: str


class Notifier:
    def send(self, notification: Notification) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Writes notifications to the log; used when mail is disabled."""

    def send(self, notification: Notification) -> None:
        logger.info("notification: subject=%r body=%r", notification.subject, notification.body)


class SmtpNotifier(Notifier):
    def __init__(self, host=config.MAIL_HOST, port=config.MAIL_PORT,
                 sender=config.MAIL_FROM, recipient=config.MAIL_TO, timeout=10):
        self.host = host
        self.port = port
        self.sender = sender
        self.recipient = recipient
        self.timeout = timeout

    def send(self, notification: Notification) -> None:
        message = EmailMessage()
        message["Subject"] = notification.subject
        message["From"] = self.sender
        message["To"] = self.recipient
        message.set_content(notification.body)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.send_message(message)
        logger.debug("send: mail sent to %s", self.recipient)


def get_notifier() -> Notifier:
    if config.MAIL_ACTIVE:
        return SmtpNotifier()
    return LogNotifier()
