"""
Django Test Settings: SQLite в пам'яті замість MySQL.

Використання:
    python manage.py test --settings=test_settings
    pytest  (DJANGO_SETTINGS_MODULE задано в pyproject.toml)
"""

from lookbook.settings import *

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

DEBUG = False

# Простий хешер паролів для швидкості
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.dummy.DummyCache',
    }
}

# Мінімальне логування
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'ERROR',
    },
}

# Зовнішні сервіси в тестах не викликаються: запити мокаються
SUPABASE_URL = 'https://storage.test'
SUPABASE_SERVICE_ROLE_KEY = 'test-key'
GOOGLE_SHEET_ID = 'test-sheet'
GOOGLE_SHEET_NAME = 'products'
CATALOG_HTTP_TIMEOUT = 5

CELERY_TASK_ALWAYS_EAGER = True
