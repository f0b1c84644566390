"""Celery tasks that deliver outbound webhook calls."""

import logging

import httpx
from celery import shared_task
from django.conf import settings

logger = logging.getLogger(__name__)


def _timeout():
    return getattr(settings, "NOTIFIER_WEBHOOK_TIMEOUT", 10)


@shared_task(bind=True, time_limit=60, ignore_result=True)
def post_webhook_message(self, url, username, content):
    """POST a chat-style message (Discord webhook payload) to ``url``.

    Delivery is best-effort: HTTP failures are logged, never retried.
    """
    if not url:
        return "No webhook configured"
    try:
        response = httpx.post(
            url,
            json={"username": username, "content": content},
            timeout=_timeout(),
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Webhook delivery for %r failed: %s", username, exc)
        return f"Failed: {exc}"
    return f"Delivered ({response.status_code})"


@shared_task(bind=True, time_limit=60, ignore_result=True)
def post_empty_request(self, url):
    """POST an empty body to ``url`` (e.g. a smart-home "request assistant" hook)."""
    if not url:
        return "No URL configured"
    try:
        response = httpx.post(url, timeout=_timeout())
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        return f"Failed: {exc}"
    return f"Delivered ({response.status_code})"
