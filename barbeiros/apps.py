from django.apps import AppConfig


class BarbeirosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "barbeiros"
