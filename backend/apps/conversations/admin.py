from django.contrib import admin

from apps.conversations.models import ConversationSession


@admin.register(ConversationSession)
class ConversationSessionAdmin(admin.ModelAdmin):
    list_display = ("identity", "state", "step", "last_activity")
    list_filter = ("state",)
    search_fields = ("identity",)
    readonly_fields = ("created_at",)
