"""
Development settings for giftcard_server project.
"""

from decouple import config
from .base import *

DEBUG = config('DEBUG', default=True, cast=bool)

# Email backend for development
EMAIL_BACKEND = config('EMAIL_BACKEND', default='django.core.mail.backends.console.EmailBackend')

# Logging for development
LOGGING['handlers']['console']['level'] = config('LOG_LEVEL', default='DEBUG')
LOGGING['root']['level'] = config('LOG_LEVEL', default='DEBUG')
