from django.contrib import admin

from apps.accounts.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("name", "identity", "email", "role", "organization", "team")
    search_fields = ("name", "identity", "email")
    list_filter = ("role",)
    raw_id_fields = ("organization", "team")
    exclude = ("github_token", "jira_api_token")
