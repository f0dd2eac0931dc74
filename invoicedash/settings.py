"""
Invoice Dashboard – Django Settings
"""

from pathlib import Path
import os
import re

import environ
import dj_database_url
from csp.constants import SELF

# =============================================================================
# BASE SETUP
# =============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent
env = environ.Env()

IS_PRODUCTION = env.bool("PRODUCTION", default=False)
DEBUG = env.bool("DEBUG", default=not IS_PRODUCTION)

# =============================================================================
# ENVIRONMENT VALIDATION (FAIL-FAST)
# =============================================================================
from invoicedash.env_validation import validate_env
validate_env()

# =============================================================================
# SECURITY
# =============================================================================
SECRET_KEY = env("SECRET_KEY", default="django-insecure-dev-only-change-in-production")

if IS_PRODUCTION:
    ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])
else:
    ALLOWED_HOSTS = ["*"]

CSRF_TRUSTED_ORIGINS = [f"https://{host}" for host in ALLOWED_HOSTS if "*" not in host]

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_AGE = 60 * 60 * 24 * 30
CSRF_COOKIE_HTTPONLY = True
CSRF_COOKIE_SAMESITE = 'Lax'

if IS_PRODUCTION:
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_HSTS_SECONDS = 31536000 # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = "DENY"
    SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "default-src": [SELF],
        "style-src": [SELF, "'unsafe-inline'"],
        "img-src": [SELF, "data:", "https:"],
    },
}

# Rate Limiting
RATELIMIT_ENABLE = env.bool("RATE_LIMIT_ENABLED", default=True)
RATELIMIT_USE_CACHE = 'default'
LOGIN_RATE_LIMIT = env("LOGIN_RATE_LIMIT", default="10/m")

if not IS_PRODUCTION:
    # locmem is not shared across workers
    SILENCED_SYSTEM_CHECKS = ["django_ratelimit.E003", "django_ratelimit.W001"]

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.Argon2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
]

AUTHENTICATION_BACKENDS = [
    'invoices.backends.CredentialsBackend',
    'django.contrib.auth.backends.ModelBackend',
]

# Structured Logging
LOG_LEVEL = env("LOG_LEVEL", default="INFO")
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'structured': {
            'format': '[%(asctime)s] %(levelname)s [%(name)s:%(lineno)s] [request_id=%(request_id)s] %(message)s',
        },
    },
    'filters': {
        'request_id': {
            '()': 'invoicedash.logging_filters.RequestIDFilter',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'structured',
            'filters': ['request_id'],
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
}

# =============================================================================
# INSTALLED APPS
# =============================================================================
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "csp",
    "invoices.apps.InvoicesConfig",
]

# =============================================================================
# DATABASE
# =============================================================================
DATABASE_URL = env("DATABASE_URL", default="").strip()
DATABASES = {
    "default": dj_database_url.config(
        default="sqlite:///" + str(BASE_DIR / "db.sqlite3"),
        conn_max_age=600,
        conn_health_checks=True,
        ssl_require=IS_PRODUCTION
    )
}

if DATABASE_URL and IS_PRODUCTION:
    # Strip unsupported params for hosted PostgreSQL (e.g. Neon)
    clean_url = re.sub(r'[?&]channel_binding=[^&]+', '', DATABASE_URL).replace('?&', '?').rstrip('&')
    DATABASES["default"] = dj_database_url.parse(
        clean_url,
        conn_max_age=600,
        conn_health_checks=True,
        ssl_require=True
    )
    DATABASES["default"]["OPTIONS"] = {"connect_timeout": 10, "sslmode": "require"}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# CACHING
# =============================================================================
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "invoicedash",
    }
}

if IS_PRODUCTION:
    REDIS_URL = os.getenv("REDIS_URL")
    if REDIS_URL:
        CACHES["default"] = {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "IGNORE_EXCEPTIONS": True,
            }
        }

INVOICE_LIST_CACHE_TIMEOUT = env.int("INVOICE_LIST_CACHE_TIMEOUT", default=300)

# =============================================================================
# MIDDLEWARE
# =============================================================================
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "invoicedash.middleware.RequestIDMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "invoices.middleware.AuthorizationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "csp.middleware.CSPMiddleware",
]

ROOT_URLCONF = "invoicedash.urls"
WSGI_APPLICATION = "invoicedash.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# =============================================================================
# I18N / TIME
# =============================================================================
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# =============================================================================
# STATIC FILES
# =============================================================================
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
}

# =============================================================================
# AUTH GATE
# =============================================================================
AUTH_GATE = {
    "SIGN_IN_PATH": "/login",
    "PROTECTED_PREFIX": "/dashboard",
    "LANDING_PATH": "/dashboard",
    "EXEMPT_PREFIXES": ["/static/", "/admin/", "/health/"],
}

LOGIN_URL = AUTH_GATE["SIGN_IN_PATH"]
LOGIN_REDIRECT_URL = AUTH_GATE["LANDING_PATH"]
LOGOUT_REDIRECT_URL = "/"
