"""Outbound notifications.

The service layer depends on ``INotifier`` only.  ``EmailNotifier`` hands
messages to the ``core.send_email`` Celery task so a slow or failing mail
server never affects the HTTP response that triggered the notification.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from modules.core import tasks

logger = structlog.get_logger(__name__)


class INotifier(Protocol):
    """Fire-and-forget message sink."""

    def send_email(self, to_address: str, subject: str, body: str) -> None: ...


class EmailNotifier:
    """Queue e-mails on Celery; dispatch failures are logged, never raised."""

    def send_email(self, to_address: str, subject: str, body: str) -> None:
        log = logger.bind(to=to_address, subject=subject)
        if not to_address:
            log.warning("notification.skipped_no_address")
            return
        try:
            tasks.send_email.delay(to_address, subject, body)
        except Exception:
            log.exception("notification.dispatch_failed")
            return
        log.info("notification.dispatched")
