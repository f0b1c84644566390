from django.contrib import admin

from .models import BabyProfile


@admin.register(BabyProfile)
class BabyProfileAdmin(admin.ModelAdmin):
    list_display = ["name", "nickname", "handle", "date_of_birth", "stage", "created_at"]
    list_filter = ["stage", "gender_at_birth"]
    search_fields = ["name", "nickname", "handle"]
    date_hierarchy = "date_of_birth"
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = [
        (None, {"fields": ["id", "name", "nickname", "handle", "gender_at_birth", "date_of_birth", "stage"]}),
        (
            "Feeding & pumping",
            {
                "fields": [
                    "default_feeding_volume",
                    "feeding_interval",
                    "night_feeding_interval",
                    "pumping_duration",
                    "pumping_interval",
                    "night_pumping_interval",
                ]
            },
        ),
        (
            "Daytime",
            {
                "fields": [
                    "baby_daytime_start",
                    "baby_daytime_end",
                    "parent_daytime_start",
                    "parent_daytime_end",
                ]
            },
        ),
        (
            "Notifications",
            {
                "fields": [
                    "enable_feeding_reminder",
                    "enable_pumping_reminder",
                    "enable_feeding_notification",
                    "enable_pumping_notification",
                    "enable_other_activities_notification",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]
