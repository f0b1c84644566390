from django.apps import AppConfig


class DiapersConfig(AppConfig):
    name = "diapers"
    default_auto_field = "django.db.models.BigAutoField"
