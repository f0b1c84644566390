from django.apps import AppConfig
from django.conf import settings


class NotificationsConfig(AppConfig):
    name = "notifications"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        import notifications.signals  # noqa: F401

        from .service import NotificationService

        self.service = NotificationService()
        if getattr(settings, "REMINDER_SCHEDULER_AUTOSTART", False):
            self.service.scheduler.start()
