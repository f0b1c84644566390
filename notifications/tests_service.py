"""Tests for the notification service, webhook gateway and delivery tasks."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import httpx
from django.test import SimpleTestCase, override_settings

from .gateway import WebhookGateway
from .reminders import EventKind, ReminderFamily
from .service import NotificationService
from .tasks import post_empty_request, post_webhook_message
from .testing import RecordingGateway, at, frozen_now, make_event, make_snapshot


class NotificationServiceTests(SimpleTestCase):
    def setUp(self):
        self.gateway = RecordingGateway()
        self.service = NotificationService(
            gateway=self.gateway, request_assistant_url="http://hooks.local/help"
        )
        self.snapshot = make_snapshot(name="Alice", nickname="Bean")

    def test_profile_updated_announces_and_caches(self):
        self.service.profile_updated(self.snapshot)
        self.assertEqual(self.gateway.sent, [("[Profile] Bean", "Profile updated")])
        self.assertIs(self.service.snapshots.get("p1"), self.snapshot)

    def test_profile_removed_drops_reminders(self):
        self.service.event_created(make_event("e1", at(10), profile=self.snapshot))
        self.service.profile_removed(self.snapshot)

        self.assertEqual(len(self.service.registry), 0)
        self.assertIsNone(self.service.snapshots.get("p1"))
        self.assertEqual(
            self.gateway.sent[-1],
            ("[Profile] Bean", "Profile removed! All associated data are also removed."),
        )

    def test_feeding_is_announced_when_enabled(self):
        self.service.event_created(
            make_event("e1", at(10), profile=self.snapshot, summary="Bottlefeed baby 90ml")
        )
        self.assertEqual(self.gateway.sent, [("[Log] Bean", "Bottlefeed baby 90ml")])
        self.assertIn("e1", self.service.registry)
        self.assertIn("p1", self.service.snapshots)

    def test_update_is_announced(self):
        event = make_event("e1", at(10), profile=self.snapshot, summary="Bottlefeed baby 90ml")
        self.service.event_created(event)
        self.service.event_updated(make_event("e1", at(10, 15), profile=self.snapshot, summary="Bottlefeed baby 120ml"))
        self.assertEqual(self.gateway.sent[-1], ("[Update] Bean", "Bottlefeed baby 120ml"))
        self.assertEqual(self.service.registry.get("e1").event_timestamp, at(10, 15))

    def test_pumping_announcement_follows_its_flag(self):
        snapshot = make_snapshot(enable_pumping_notification=False)
        self.service.event_created(
            make_event("p", at(10), kind=EventKind.PUMPING, profile=snapshot, summary="Mom pumped 60ml")
        )
        self.assertEqual(self.gateway.sent, [])
        # Reminder is still tracked even when the log is not announced
        self.assertIn("p", self.service.registry)

    def test_other_activities_are_silent_by_default(self):
        self.service.event_created(
            make_event("d", at(10), kind=EventKind.DIAPER_CHANGE, profile=self.snapshot, summary="Wet diaper")
        )
        self.assertEqual(self.gateway.sent, [])
        self.assertEqual(len(self.service.registry), 0)

    def test_other_activities_announced_when_enabled(self):
        snapshot = make_snapshot(name="Alice", enable_other_activities_notification=True)
        self.service.event_created(
            make_event("d", at(10), kind=EventKind.DIAPER_CHANGE, profile=snapshot, summary="Poopy diaper")
        )
        self.assertEqual(self.gateway.sent, [("[Log] Alice", "Poopy diaper")])

    def test_event_removed_falls_back(self):
        self.service.event_created(make_event("e1", at(9), profile=self.snapshot))
        self.service.event_created(make_event("e2", at(10), profile=self.snapshot))
        self.service.event_removed(make_event("e2", at(10), profile=self.snapshot))
        self.assertEqual(
            [r.event_id for r in self.service.registry.reminders()], ["e1"]
        )

    def test_request_assistant(self):
        self.service.request_assistant(self.snapshot)
        self.assertEqual(self.gateway.sent, [("[Help] Bean", "Needs assistance!")])
        self.assertEqual(self.gateway.calls, ["http://hooks.local/help"])

    def test_notify_message_system_sender(self):
        self.service.notify_message("Server restarted")
        self.assertEqual(self.gateway.sent, [("[Notify] System", "Server restarted")])

    def test_notify_message_debug_for_profile(self):
        self.service.notify_message("hello", self.snapshot, debug=True)
        self.assertEqual(self.gateway.sent, [])
        self.assertEqual(self.gateway.debug, [("[Notify] Bean", "hello")])

    def test_live_reminders_reports_next_timestamp(self):
        self.service.event_created(make_event("e1", at(10), profile=self.snapshot))

        with frozen_now(at(10)):
            rows = self.service.live_reminders("p1")

        self.assertEqual(len(rows), 1)
        reminder, next_timestamp = rows[0]
        self.assertEqual(reminder.family, ReminderFamily.FEEDING)
        self.assertEqual(next_timestamp, at(13))
        # A copy: changing it leaves the registry alone
        reminder.last_notified_timestamp = at(11)
        self.assertIsNone(self.service.registry.get("e1").last_notified_timestamp)

    def test_live_reminders_unknown_profile(self):
        self.assertEqual(self.service.live_reminders("nobody"), [])

    def test_scheduler_shares_the_service_state(self):
        self.service.event_created(make_event("e1", at(10), profile=self.snapshot))
        with frozen_now(at(12, 30)):
            self.service.scheduler.tick(at(12, 30))
        self.assertEqual(self.gateway.sent[-1][0], "[Reminder] Bean")

    def test_snapshot_from_event_refreshes_cache(self):
        self.service.profile_updated(self.snapshot)
        changed = make_snapshot(name="Alice", nickname="Bean", feeding_interval=timedelta(hours=2))
        self.service.event_created(make_event("e1", at(10), profile=changed))
        self.assertEqual(
            self.service.snapshots.get("p1").feeding_interval, timedelta(hours=2)
        )


@patch("notifications.gateway.post_empty_request")
@patch("notifications.gateway.post_webhook_message")
class WebhookGatewayTests(SimpleTestCase):
    def test_notify_posts_to_webhook(self, mock_message, mock_empty):
        gateway = WebhookGateway(webhook_url="http://chat.local/hook")
        gateway.notify("[Log] Bean", "Wet diaper")
        mock_message.delay.assert_called_once_with(
            "http://chat.local/hook", "[Log] Bean", "Wet diaper"
        )

    def test_dev_prefix_and_mention(self, mock_message, mock_empty):
        gateway = WebhookGateway(
            webhook_url="http://chat.local/hook", mention_role_id="42", dev_mode=True
        )
        gateway.notify("[Log] Bean", "Wet diaper")
        mock_message.delay.assert_called_once_with(
            "http://chat.local/hook", "{DEV} [Log] Bean", "<@&42> Wet diaper"
        )

    def test_debug_prefixes(self, mock_message, mock_empty):
        WebhookGateway(debug_url="http://chat.local/debug").notify_debug("[Reminder] Bean", "x")
        WebhookGateway(debug_url="http://chat.local/debug", dev_mode=True).notify_debug(
            "[Reminder] Bean", "y"
        )
        self.assertEqual(
            [c.args for c in mock_message.delay.call_args_list],
            [
                ("http://chat.local/debug", "{DEBUG} [Reminder] Bean", "x"),
                ("http://chat.local/debug", "{DEBUG-DEV} [Reminder] Bean", "y"),
            ],
        )

    def test_empty_urls_send_nothing(self, mock_message, mock_empty):
        gateway = WebhookGateway()
        gateway.notify("[Log] Bean", "Wet diaper")
        gateway.notify_debug("[Log] Bean", "Wet diaper")
        gateway.call("")
        mock_message.delay.assert_not_called()
        mock_empty.delay.assert_not_called()

    def test_call_posts_empty_request(self, mock_message, mock_empty):
        WebhookGateway().call("http://hooks.local/help")
        mock_empty.delay.assert_called_once_with("http://hooks.local/help")

    def test_enqueue_failure_is_swallowed(self, mock_message, mock_empty):
        mock_message.delay.side_effect = ConnectionError("broker down")
        gateway = WebhookGateway(webhook_url="http://chat.local/hook")
        with self.assertLogs("notifications.gateway", level="WARNING"):
            gateway.notify("[Log] Bean", "Wet diaper")

    @override_settings(
        NOTIFIER_WEBHOOK_URL="http://chat.local/hook",
        NOTIFIER_WEBHOOK_DEBUG_URL="http://chat.local/debug",
        NOTIFIER_WEBHOOK_MENTION_ROLE_ID="7",
        DEBUG=False,
    )
    def test_from_settings(self, mock_message, mock_empty):
        gateway = WebhookGateway.from_settings()
        self.assertEqual(gateway.webhook_url, "http://chat.local/hook")
        self.assertEqual(gateway.debug_url, "http://chat.local/debug")
        self.assertEqual(gateway.mention_role_id, "7")
        self.assertFalse(gateway.dev_mode)


class WebhookTaskTests(SimpleTestCase):
    @patch("notifications.tasks.httpx.post")
    def test_post_webhook_message_payload(self, mock_post):
        mock_post.return_value = MagicMock(status_code=204)

        result = post_webhook_message("http://chat.local/hook", "[Log] Bean", "Wet diaper")

        self.assertEqual(result, "Delivered (204)")
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        self.assertEqual(args, ("http://chat.local/hook",))
        self.assertEqual(
            kwargs["json"], {"username": "[Log] Bean", "content": "Wet diaper"}
        )

    @patch("notifications.tasks.httpx.post")
    def test_http_failure_is_logged_not_raised(self, mock_post):
        mock_post.side_effect = httpx.ConnectError("connection refused")

        with self.assertLogs("notifications.tasks", level="WARNING"):
            result = post_webhook_message("http://chat.local/hook", "[Log] Bean", "x")

        self.assertTrue(result.startswith("Failed"))

    @patch("notifications.tasks.httpx.post")
    def test_missing_url(self, mock_post):
        self.assertEqual(post_webhook_message("", "a", "b"), "No webhook configured")
        self.assertEqual(post_empty_request(""), "No URL configured")
        mock_post.assert_not_called()

    @patch("notifications.tasks.httpx.post")
    def test_post_empty_request(self, mock_post):
        mock_post.return_value = MagicMock(status_code=200)
        self.assertEqual(post_empty_request("http://hooks.local/help"), "Delivered (200)")
        args, kwargs = mock_post.call_args
        self.assertEqual(args, ("http://hooks.local/help",))
        self.assertNotIn("json", kwargs)
