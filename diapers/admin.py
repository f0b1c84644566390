from django.contrib import admin

from .models import DiaperChange


@admin.register(DiaperChange)
class DiaperChangeAdmin(admin.ModelAdmin):
    list_display = ["profile", "change_type", "changed_at"]
    list_filter = ["change_type", "changed_at", "created_at"]
    search_fields = ["profile__name", "profile__handle"]
    date_hierarchy = "changed_at"
