from django.contrib import admin

from apps.teams.models import Team


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "organization", "lead_identity", "is_active", "created_at")
    search_fields = ("name", "lead_identity")
    list_filter = ("is_active",)
    raw_id_fields = ("organization",)
