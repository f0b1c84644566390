from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ["profile", "kind", "occurred_at", "created_at"]
    list_filter = ["kind", "occurred_at"]
    search_fields = ["profile__name", "prescription", "comment"]
    date_hierarchy = "occurred_at"
