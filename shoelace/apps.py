from django.apps import AppConfig


class ShoelaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "shoelace"
    verbose_name = "Shoelace forms"
