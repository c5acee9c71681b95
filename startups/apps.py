from django.apps import AppConfig


class StartupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = 'startups'
    verbose_name = "Startups"

    def ready(self):
        from . import signals  # noqa: F401
