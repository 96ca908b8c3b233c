"""
Production settings for the Lookbook catalog.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Завантажимо змінні оточення з файлу ДО імпорту базових налаштувань.
# Пріоритет: DJANGO_ENV_FILE -> .env.production
BASE_DIR = Path(__file__).resolve().parent.parent
_explicit_env_file = os.environ.get('DJANGO_ENV_FILE')
if _explicit_env_file:
    load_dotenv(_explicit_env_file)
else:
    load_dotenv(BASE_DIR / '.env.production')

from .settings import *  # noqa: E402,F401,F403

import pymysql  # noqa: E402

# PyMySQL замість mysqlclient
pymysql.install_as_MySQLdb()

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = False

SECRET_KEY = os.environ.get('SECRET_KEY', SECRET_KEY)

# ALLOWED_HOSTS/CSRF_TRUSTED_ORIGINS читаємо зі змінних оточення
_allowed_hosts_env = os.environ.get('ALLOWED_HOSTS')
if _allowed_hosts_env:
    _allowed_hosts_env = _allowed_hosts_env.strip()
    if _allowed_hosts_env == '*':
        ALLOWED_HOSTS = ['*']
    else:
        ALLOWED_HOSTS = [h.strip() for h in _allowed_hosts_env.split(',') if h.strip()]

_csrf_origins_env = os.environ.get('CSRF_TRUSTED_ORIGINS')
if _csrf_origins_env:
    CSRF_TRUSTED_ORIGINS = [o.strip() for o in _csrf_origins_env.split(',') if o.strip()]
else:
    # Якщо явно не задано, формуємо з ALLOWED_HOSTS (для доменних імен)
    CSRF_TRUSTED_ORIGINS = []
    for h in ALLOWED_HOSTS:
        if h not in ('localhost', '127.0.0.1') and not h.startswith('*'):
            CSRF_TRUSTED_ORIGINS.extend([f"http://{h}", f"https://{h}"])

# База даних: MySQL, якщо задано DB_NAME/DB_USER, інакше SQLite з базових налаштувань
if os.environ.get('DB_NAME') and os.environ.get('DB_USER'):
    _options = {
        'charset': 'utf8mb4',
        'use_unicode': True,
        'init_command': "SET NAMES 'utf8mb4' COLLATE 'utf8mb4_unicode_ci'",
        'sql_mode': os.environ.get(
            'DB_SQL_MODE',
            'STRICT_TRANS_TABLES,ERROR_FOR_DIVISION_BY_ZERO,NO_ZERO_DATE,NO_ZERO_IN_DATE,NO_ENGINE_SUBSTITUTION',
        ),
    }

    # SSL через змінні оточення (опціонально)
    _ssl = {}
    if os.environ.get('DB_SSL_CA'):
        _ssl['ca'] = os.environ['DB_SSL_CA']
    if os.environ.get('DB_SSL_CERT'):
        _ssl['cert'] = os.environ['DB_SSL_CERT']
    if os.environ.get('DB_SSL_KEY'):
        _ssl['key'] = os.environ['DB_SSL_KEY']
    if _ssl:
        _options['ssl'] = _ssl

    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.mysql',
            'NAME': os.environ['DB_NAME'],
            'USER': os.environ['DB_USER'],
            'PASSWORD': os.environ.get('DB_PASSWORD', ''),
            'HOST': os.environ.get('DB_HOST', 'localhost'),
            'PORT': os.environ.get('DB_PORT', '3306'),
            'CONN_MAX_AGE': int(os.environ.get('DB_CONN_MAX_AGE', '60')),
            'OPTIONS': _options,
        }
    }

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Логування наслідуємо з базових налаштувань, рівень каталогу - з оточення
LOGGING['loggers']['catalog']['level'] = os.environ.get('CATALOG_LOG_LEVEL', 'WARNING')
