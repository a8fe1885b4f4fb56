"""FastAPI side of notification delivery."""
import logging

from fastapi import BackgroundTasks

from .notifier import Notification, Notifier

logger = logging.getLogger(__name__)


class BackgroundNotifier(Notifier):
    """Queues delivery on FastAPI background tasks, after the response is sent."""

    def __init__(self, delegate: Notifier, background_tasks: BackgroundTasks):
        self.delegate = delegate
        self.background_tasks = background_tasks

    def send(self, notification: Notification) -> None:
        self.background_tasks.add_task(self._deliver, notification)

    def _deliver(self, notification: Notification) -> None:
        try:
            self.delegate.send(notification)
        except Exception:
            logger.exception("notification %r could not be delivered", notification.subject)
