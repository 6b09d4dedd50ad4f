"""
Vaccines App Configuration
"""

from django.apps import AppConfig


class VaccinesConfig(AppConfig):
    """App configuration for the vaccine catalog, schedules and planner."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'vaxi_backend.vaccines'
    verbose_name = 'Vaccines (Catalog, Schedules & Planner)'
