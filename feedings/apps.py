from django.apps import AppConfig


class FeedingsConfig(AppConfig):
    name = "feedings"
    default_auto_field = "django.db.models.BigAutoField"
