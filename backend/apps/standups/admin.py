from django.contrib import admin

from apps.standups.models import Standup


@admin.register(Standup)
class StandupAdmin(admin.ModelAdmin):
    list_display = ("user", "standup_date", "status", "submitted_at")
    list_filter = ("status", "standup_date")
    search_fields = ("user__name", "user__identity")
    raw_id_fields = ("user",)
    date_hierarchy = "standup_date"
