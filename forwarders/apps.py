"""Forwarders app configuration."""

from django.apps import AppConfig


class ForwardersConfig(AppConfig):
    """Django app config for freight forwarders."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'forwarders'
