"""Outbound notification gateway.

The reminder engine only depends on ``notify(sender, message)`` and
``notify_debug(sender, message)``. Both are fire-and-forget and never raise:
``WebhookGateway`` hands the HTTP call to a Celery task and logs (then drops)
anything that goes wrong while enqueueing it.
"""

import logging

from django.conf import settings

from .tasks import post_empty_request, post_webhook_message

logger = logging.getLogger(__name__)


class WebhookGateway:
    """Sends notifications to a chat webhook (Discord-style payload).

    Attributes:
        webhook_url: Main notification webhook; empty disables sending
        debug_url: Webhook receiving verbose debug copies; empty disables them
        mention_role_id: Role mentioned in every message so mobile clients
            keep raising push notifications
        dev_mode: Prefix senders with ``{DEV}`` (non-production deployments)
    """

    def __init__(self, webhook_url="", debug_url="", mention_role_id="", dev_mode=False):
        self.webhook_url = webhook_url
        self.debug_url = debug_url
        self.mention_role_id = mention_role_id
        self.dev_mode = dev_mode

    @classmethod
    def from_settings(cls):
        return cls(
            webhook_url=settings.NOTIFIER_WEBHOOK_URL,
            debug_url=settings.NOTIFIER_WEBHOOK_DEBUG_URL,
            mention_role_id=settings.NOTIFIER_WEBHOOK_MENTION_ROLE_ID,
            dev_mode=settings.DEBUG,
        )

    def notify(self, sender, message):
        if not self.webhook_url:
            return
        username = f"{{DEV}} {sender}" if self.dev_mode else sender
        mention = f"<@&{self.mention_role_id}> " if self.mention_role_id else ""
        self._enqueue(post_webhook_message, self.webhook_url, username, f"{mention}{message}")

    def notify_debug(self, sender, message):
        if not self.debug_url:
            return
        prefix = "{DEBUG-DEV}" if self.dev_mode else "{DEBUG}"
        self._enqueue(post_webhook_message, self.debug_url, f"{prefix} {sender}", message)

    def call(self, url):
        """Fire an empty POST at ``url`` (no-op when empty)."""
        if not url:
            return
        self._enqueue(post_empty_request, url)

    def _enqueue(self, task, *args):
        try:
            task.delay(*args)
        except Exception:
            logger.warning("Could not enqueue %s", task.name, exc_info=True)
