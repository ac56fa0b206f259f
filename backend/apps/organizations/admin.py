from django.contrib import admin

from apps.organizations.models import Organization


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "domain", "created_by_name", "is_active", "created_at")
    search_fields = ("name", "domain")
    list_filter = ("is_active",)
