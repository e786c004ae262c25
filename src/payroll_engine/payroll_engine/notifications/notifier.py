from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget notification sink. Failures never affect payroll state."""

    def notify(
        self,
        *,
        recipient_id: int,
        title: str,
        message: str,
        type: str,
        sender_id: Optional[int] = None,
    ) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Notifier that only writes to the application log."""

    def notify(
        self,
        *,
        recipient_id: int,
        title: str,
        message: str,
        type: str,
        sender_id: Optional[int] = None,
    ) -> None:
        logger.info("notification[%s] to=%s from=%s: %s - %s", type, recipient_id, sender_id, title, message)
