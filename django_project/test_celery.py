"""
Tests for Celery configuration and task functionality.

Verifies:
- Celery app is properly configured
- Broker/result backend use Redis
- Webhook delivery tasks are registered
- Task execution (in eager mode for testing)
"""

from unittest.mock import MagicMock, patch

from celery import shared_task
from django.test import TestCase, override_settings

from django_project.celery import app


class CeleryConfigurationTests(TestCase):
    """Test Celery app configuration."""

    def test_celery_app_exists(self):
        """Verify Celery app is initialized."""
        self.assertIsNotNone(app)
        self.assertEqual(app.main, "babycare")

    def test_celery_broker_url_configured(self):
        """Verify Celery broker URL is set to Redis."""
        self.assertTrue(app.conf.broker_url.startswith("redis://"))

    def test_celery_result_backend_configured(self):
        """Verify Celery result backend is set to Redis."""
        self.assertTrue(app.conf.result_backend.startswith("redis://"))

    def test_celery_uses_json(self):
        """Verify Celery is configured to use JSON serialization."""
        self.assertIn("json", app.conf.accept_content)
        self.assertEqual(app.conf.task_serializer, "json")
        self.assertEqual(app.conf.result_serializer, "json")

    def test_celery_timezone_configured(self):
        self.assertEqual(app.conf.timezone, "UTC")

    def test_task_time_limits(self):
        """Soft limit fires before the hard limit."""
        self.assertEqual(app.conf.task_time_limit, 5 * 60)
        self.assertLess(app.conf.task_soft_time_limit, app.conf.task_time_limit)


class CeleryTaskRegistrationTests(TestCase):
    """Webhook tasks are discovered from the notifications app."""

    def test_webhook_tasks_registered(self):
        import notifications.tasks  # noqa: F401

        self.assertIn("notifications.tasks.post_webhook_message", app.tasks)
        self.assertIn("notifications.tasks.post_empty_request", app.tasks)


@override_settings(CELERY_TASK_ALWAYS_EAGER=True)
class CeleryTaskExecutionTests(TestCase):
    """Test task execution (in eager mode for testing)."""

    def test_simple_task_execution(self):
        @shared_task
        def add(x, y):
            return x + y

        result = add.delay(2, 3)
        self.assertEqual(result.get(), 5)

    @patch("notifications.tasks.httpx.post")
    def test_webhook_task_runs_eagerly(self, mock_post):
        """Delaying the webhook task delivers immediately in tests."""
        from notifications.tasks import post_webhook_message

        mock_post.return_value = MagicMock(status_code=204)
        result = post_webhook_message.delay("http://chat.local/hook", "[Log] Bean", "Wet diaper")
        self.assertEqual(result.get(), "Delivered (204)")
        mock_post.assert_called_once()
