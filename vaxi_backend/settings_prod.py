"""
Production settings for the VaxiApp backend.

Usage:
    export DJANGO_SETTINGS_MODULE=vaxi_backend.settings_prod
    gunicorn vaxi_backend.wsgi:application
    celery -A vaxi_backend worker -B

Required environment: DJANGO_SECRET_KEY, DATABASE_URL, DJANGO_ALLOWED_HOSTS.
"""

import os
from datetime import timedelta

from celery.schedules import crontab

from .settings import *  # noqa: F401,F403
from .settings import BASE_DIR, CELERY_BEAT_SCHEDULE, LOGGING, MIDDLEWARE, REST_FRAMEWORK


def _env_list(name):
    return [item.strip() for item in os.getenv(name, '').split(',') if item.strip()]


DEBUG = False

SECRET_KEY = os.environ['DJANGO_SECRET_KEY']
JWT_SIGNING_KEY = os.getenv('JWT_SIGNING_KEY', SECRET_KEY)

ALLOWED_HOSTS = _env_list('DJANGO_ALLOWED_HOSTS')
CSRF_TRUSTED_ORIGINS = _env_list('CSRF_TRUSTED_ORIGINS')

# Without DATABASE_URL the base settings fall back to SQLite.
if not os.getenv('DATABASE_URL'):
    raise RuntimeError('DATABASE_URL must be set for production settings.')


# HTTPS behind a proxy
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = int(os.getenv('SECURE_HSTS_SECONDS', '31536000'))
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
X_FRAME_OPTIONS = 'DENY'

CORS_ALLOW_ALL_ORIGINS = False


# Static files for the admin, served by WhiteNoise right after SecurityMiddleware.
MIDDLEWARE.insert(MIDDLEWARE.index('django.middleware.security.SecurityMiddleware') + 1,
                  'whitenoise.middleware.WhiteNoiseMiddleware')
STATIC_ROOT = BASE_DIR / 'staticfiles'
STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage'},
}


# API: JSON only. Login and refresh share the stricter "auth" scope.
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': ('rest_framework.renderers.JSONRenderer',),
    'DEFAULT_PARSER_CLASSES': ('rest_framework.parsers.JSONParser',),
    'DEFAULT_THROTTLE_CLASSES': (
        'rest_framework.throttling.AnonRateThrottle',
        'rest_framework.throttling.UserRateThrottle',
        'rest_framework.throttling.ScopedRateThrottle',
    ),
    'DEFAULT_THROTTLE_RATES': {
        'anon': os.getenv('VAXI_THROTTLE_ANON', '60/hour'),
        'user': os.getenv('VAXI_THROTTLE_USER', '2000/hour'),
        'auth': os.getenv('VAXI_THROTTLE_AUTH', '20/minute'),
    },
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=int(os.getenv('JWT_ACCESS_MINUTES', '15'))),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=int(os.getenv('JWT_REFRESH_DAYS', '7'))),
    'ALGORITHM': 'HS256',
    'SIGNING_KEY': JWT_SIGNING_KEY,
    'ROTATE_REFRESH_TOKENS': True,
}


# Redis: db 0 is the Celery broker, db 1 the cache (also backs throttling).
REDIS_URL = os.getenv('REDIS_URL', f"redis://{os.getenv('REDIS_HOST', 'localhost')}:6379")

CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', f'{REDIS_URL}/0')
CELERY_RESULT_BACKEND = CELERY_BROKER_URL
CELERY_TASK_ALWAYS_EAGER = False
CELERY_BEAT_SCHEDULE = {
    **CELERY_BEAT_SCHEDULE,
    'synchronize-dose-statuses': {
        **CELERY_BEAT_SCHEDULE['synchronize-dose-statuses'],
        # Shortly after midnight so "today" has rolled over for every dose.
        'schedule': crontab(hour=int(os.getenv('VAXI_SYNC_HOUR', '0')), minute=15),
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': f'{REDIS_URL}/1',
        'KEY_PREFIX': 'vaxi',
    }
}


LOGGING['formatters']['verbose'] = {
    'format': '{levelname} {asctime} {name} {process:d} {message}',
    'style': '{',
}
LOGGING['handlers']['console']['formatter'] = 'verbose'
LOGGING['loggers']['django']['level'] = 'WARNING'
LOGGING['loggers']['django.security'] = {
    'handlers': ['console'],
    'level': 'WARNING',
    'propagate': False,
}


SENTRY_DSN = os.getenv('SENTRY_DSN', '')
if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.celery import CeleryIntegration
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration(), CeleryIntegration()],
        environment=os.getenv('SENTRY_ENVIRONMENT', 'production'),
        traces_sample_rate=float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '0.05')),
        send_default_pii=False,
    )
