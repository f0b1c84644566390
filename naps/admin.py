from django.contrib import admin

from .models import Nap


@admin.register(Nap)
class NapAdmin(admin.ModelAdmin):
    list_display = ["profile", "napped_at", "ended_at", "created_at"]
    list_filter = ["napped_at", "ended_at", "created_at"]
    search_fields = ["profile__name", "profile__handle"]
    date_hierarchy = "napped_at"
