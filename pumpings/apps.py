from django.apps import AppConfig


class PumpingsConfig(AppConfig):
    name = "pumpings"
    default_auto_field = "django.db.models.BigAutoField"
