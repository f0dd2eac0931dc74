import os
import logging
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

# Mandatory environment variables for production
REQUIRED_PRODUCTION_ENV_VARS = [
    "SECRET_KEY",
    "DATABASE_URL",
    "ALLOWED_HOSTS",
]

def validate_env():
    """
    Validate critical environment variables before settings are built.
    Safe to call more than once.
    """
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"

    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        if is_production:
            raise ImproperlyConfigured("CRITICAL: SECRET_KEY is required in production.")
        logger.warning("SECRET_KEY not set, using insecure default for development.")

    if is_production:
        missing = [var for var in REQUIRED_PRODUCTION_ENV_VARS if not os.getenv(var)]
        if missing:
            error_msg = f"CRITICAL: Missing required environment variables in production: {', '.join(missing)}"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

        if secret_key.startswith("django-insecure") or len(secret_key) < 50:
            error_msg = "CRITICAL: SECRET_KEY must be a long, secure string in production"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

        database_url = os.getenv("DATABASE_URL", "")
        if database_url.startswith("sqlite"):
            error_msg = "CRITICAL: DATABASE_URL must point at a shared database in production"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

    logger.debug("Environment validation passed")
