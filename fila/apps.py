from django.apps import AppConfig


class FilaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fila"
    verbose_name = "Lista da Vez"

    def ready(self):
        from . import signals  # noqa
