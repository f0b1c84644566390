from django.contrib import admin

from .models import Feeding


@admin.register(Feeding)
class FeedingAdmin(admin.ModelAdmin):
    list_display = [
        "profile",
        "feeding_type",
        "fed_at",
        "volume_ml",
        "left_duration_minutes",
        "right_duration_minutes",
    ]
    list_filter = ["feeding_type", "fed_at", "created_at"]
    search_fields = ["profile__name", "profile__handle"]
    date_hierarchy = "fed_at"
