"""WSGI config for the baby-care tracker.

Run a single worker process: reminder state lives in that process's memory
and the scheduler thread is started there (REMINDER_SCHEDULER_AUTOSTART).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "django_project.settings")

application = get_wsgi_application()
