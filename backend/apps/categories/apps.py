from django.apps import AppConfig


class CategoriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.categories"
    verbose_name = "Categories"

    def ready(self):
        """Connect the relation cleanup signals."""
        from . import signals  # noqa: F401
