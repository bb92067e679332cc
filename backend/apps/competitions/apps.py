from django.apps import AppConfig


class CompetitionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.competitions"

    def ready(self):
        # Cache invalidation and file cleanup on model changes
        from . import signals  # noqa: F401
