"""Invoices app configuration."""

from django.apps import AppConfig


class InvoicesConfig(AppConfig):
    """Django app config for invoices and their document attachments."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'invoices'
