"""Suppliers app configuration."""

from django.apps import AppConfig


class SuppliersConfig(AppConfig):
    """Django app config for suppliers."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'suppliers'
