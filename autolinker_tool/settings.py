"""
Django settings for the autolinker_tool.

This file contains only the configuration the linking commands need. The
project installs the autolinker app, reads article locations and the linking
configuration path from the environment, and logs to the console.

Please consult the Django documentation for additional configuration
options: https://docs.djangoproject.com/en/4.2/ref/settings/
"""

from __future__ import annotations

import os
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me')

DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

# Application definition
INSTALLED_APPS = [
    'autolinker',
]

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

# Default primary key field type
# https://docs.djangoproject.com/en/4.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Article corpus and linking rules
AUTOLINKER_CONTENT_DIR = Path(os.getenv('AUTOLINKER_CONTENT_DIR', BASE_DIR / 'content' / 'blog'))
AUTOLINKER_CONFIG = Path(os.getenv('AUTOLINKER_CONFIG', BASE_DIR / 'config' / 'linking.yaml'))
AUTOLINKER_FILE_EXTENSION = os.getenv('AUTOLINKER_FILE_EXTENSION', '.mdx')


log_level = os.getenv('DJANGO_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
        'autolinker': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
    },
}
