"""Web app configuration."""

from django.apps import AppConfig


class WebConfig(AppConfig):
    """Dashboard pages and the cookie-authenticated proxy to the API."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'web'
