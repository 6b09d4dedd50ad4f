"""
Development settings for the VaxiApp backend.

Usage:
    DJANGO_SETTINGS_MODULE=vaxi_backend.settings_dev python manage.py runserver

Celery tasks run inline, so ``sync_dose_statuses`` and the beat task work
without a Redis broker.
"""

from .settings import *  # noqa: F401,F403
from .settings import LOGGING, REST_FRAMEWORK


DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True  # dev only

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ),
}


# Engine internals (schedule regeneration, status sync, planner) at DEBUG.
LOGGING['root']['level'] = 'INFO'
LOGGING['loggers']['vaxi_backend']['level'] = 'DEBUG'
LOGGING['loggers']['django.db.backends'] = {
    'handlers': ['console'],
    'level': 'WARNING',  # DEBUG shows SQL queries
    'propagate': False,
}
