from django.apps import AppConfig


class OrientationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orientation"

    def ready(self) -> None:
        from orientation import signals  # noqa: F401
