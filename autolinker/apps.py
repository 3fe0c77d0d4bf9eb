from django.apps import AppConfig


class AutolinkerConfig(AppConfig):
    """Configuration for the autolinker Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'autolinker'
