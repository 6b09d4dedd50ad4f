"""
Core App Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """App configuration for users, roles and audit logging."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'vaxi_backend.core'
    verbose_name = 'Core (Users & Roles)'
