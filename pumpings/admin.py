from django.contrib import admin

from .models import Pumping


@admin.register(Pumping)
class PumpingAdmin(admin.ModelAdmin):
    list_display = ["profile", "pumped_at", "volume_ml", "duration_minutes"]
    list_filter = ["pumped_at", "created_at"]
    search_fields = ["profile__name", "profile__handle"]
    date_hierarchy = "pumped_at"
