"""
Subjects App Configuration
"""

from django.apps import AppConfig


class SubjectsConfig(AppConfig):
    """App configuration for users' own profiles and their dependents."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'vaxi_backend.subjects'
    verbose_name = 'Subjects (Profiles & Dependents)'
