"""
Invoice Dashboard - WSGI application for gunicorn.

Validates the environment before Django loads so a misconfigured
deployment fails at boot instead of on the first request.
"""

import os
import sys
import logging

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "invoicedash.settings")

try:
    from invoicedash.env_validation import validate_env
    validate_env()
except Exception as e:
    logger.critical(f"Environment validation failed: {e}")
    sys.exit(1)

from django.core.wsgi import get_wsgi_application

application = get_wsgi_application()
