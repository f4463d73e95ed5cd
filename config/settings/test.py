"""Settings used by the test suite.

SQLite by default, file backed so the threaded booking tests can open
several connections to the same database. Set DB_ENGINE and the DB_*
variables to run the suite against PostgreSQL row locks instead.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

if get_env('DB_ENGINE', 'django.db.backends.sqlite3') == 'django.db.backends.sqlite3':  # noqa: F405
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'test_db.sqlite3',  # noqa: F405
            'OPTIONS': SQLITE_OPTIONS,  # noqa: F405
            'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},  # noqa: F405
        }
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Manifest storage needs collectstatic, which tests never run
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
