"""Asynchronous tasks for the core module."""

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = structlog.get_logger(__name__)


@shared_task(name="core.send_email")
def send_email(to_address: str, subject: str, body: str) -> int:
    """Deliver a plain-text e-mail. Not retried on failure."""
    sent = send_mail(
        subject,
        body,
        settings.DEFAULT_FROM_EMAIL,
        [to_address],
        fail_silently=False,
    )
    logger.info("email.sent", to=to_address, subject=subject, sent=sent)
    return sent
