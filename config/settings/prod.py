"""Production settings for the FitBuddy project.

This module extends the base settings with production specific
configuration. Sensitive values must be provided via environment
variables; startup fails when they are missing.
"""

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env('DJANGO_SECRET_KEY', required=True)  # noqa: F405

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = get_env_list('DJANGO_ALLOWED_HOSTS')  # noqa: F405
if not ALLOWED_HOSTS:
    raise ImproperlyConfigured('DJANGO_ALLOWED_HOSTS must list at least one host')  # noqa: F405

# Bookings rely on SELECT ... FOR UPDATE, so production runs on PostgreSQL
DATABASES = {
    'default': {
        'ENGINE': get_env('DB_ENGINE', 'django.db.backends.postgresql'),  # noqa: F405
        'NAME': get_env('DB_NAME', required=True),  # noqa: F405
        'USER': get_env('DB_USER', required=True),  # noqa: F405
        'PASSWORD': get_env('DB_PASSWORD', required=True),  # noqa: F405
        'HOST': get_env('DB_HOST', 'localhost'),  # noqa: F405
        'PORT': get_env('DB_PORT', '5432'),  # noqa: F405
        'CONN_MAX_AGE': int(get_env('DB_CONN_MAX_AGE', '60')),  # noqa: F405
    }
}

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
