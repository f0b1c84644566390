"""
Test settings for the baby-care tracker.

Overrides production settings for test environment:
- Uses SQLite in-memory (or PostgreSQL when DATABASE_HOST is set)
- Enables eager task execution for Celery
- Disables migrations for speed
- Never starts the reminder scheduler thread or talks to real webhooks
"""

import os

from django_project.settings import *  # noqa: F401, F403

# Execute Celery tasks synchronously in tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

NOTIFIER_WEBHOOK_URL = ""
NOTIFIER_WEBHOOK_DEBUG_URL = ""
NOTIFIER_WEBHOOK_MENTION_ROLE_ID = ""
REQUEST_ASSISTANT_URL = ""
REMINDER_SCHEDULER_AUTOSTART = False

TIME_ZONE = "UTC"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

if os.environ.get("DATABASE_HOST"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DATABASE_NAME", "postgres"),
            "USER": os.environ.get("DATABASE_USER", "postgres"),
            "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
            "HOST": os.environ.get("DATABASE_HOST"),
            "PORT": os.environ.get("DATABASE_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Throttle counters live in the process cache and would leak across tests
REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_RATES": {
        "user": "100000/hour",
        "event_create": "100000/hour",
        "assistant_request": "100000/hour",
    },
}
