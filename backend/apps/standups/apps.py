from django.apps import AppConfig


class StandupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.standups"
