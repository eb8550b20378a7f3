"""
settings.py — Django project configuration for the Promo Offers backend

What this file configures
===============================================================================
- Core Django wiring (INSTALLED_APPS, MIDDLEWARE, TEMPLATES, DB)
- REST Framework defaults (admin bearer auth, IsAuthenticated, JSON errors)
- SimpleJWT for the single admin's 12-hour access token
- CORS for the admin UI / public site calling the API
- Uploaded offer assets (thumbnails, PDFs) stored on disk under UPLOAD_DIR
- Production serving of static via WhiteNoise (Swagger UI assets)
- Swagger (drf-yasg) configured to use Bearer tokens in the Authorize dialog
- CSP (django-csp v4) `frame-ancestors` so the public site can embed offer PDFs

How environment variables drive behavior (deployment-safe)
===============================================================================
DJANGO_DEBUG            -> Enables dev mode when true. Defaults to True locally.
DJANGO_SECRET_KEY       -> Required when DJANGO_DEBUG=False (production).
DJANGO_ALLOWED_HOSTS    -> Comma-separated list of allowed hostnames in prod.
DATABASE_URL            -> Optional database URL (Postgres etc.).
DB_PATH                 -> SQLite file used when DATABASE_URL is not set.
UPLOAD_DIR              -> Directory holding uploaded assets (served at /uploads/).
CORS_ORIGIN             -> Comma-separated list of allowed origins.
ADMIN_USERNAME          -> The single admin login name.
ADMIN_PASSWORD_HASH     -> Django password hash for the admin
                           (see `manage.py hash_admin_password`).
JWT_SECRET              -> Token signing key (falls back to SECRET_KEY).
LOGIN_RATE              -> Throttle for POST /admin/login (e.g. 10/min).

Deployment notes
===============================================================================
- Build command example:
    pip install . && python manage.py collectstatic --noinput && python manage.py migrate --noinput
- Start command example:
    gunicorn promo_backend.wsgi:application --log-file -
"""

from pathlib import Path
from datetime import timedelta
import os
import sys


# ---------------------------
# Helpers for env parsing
# ---------------------------
def _get_bool(env_key: str, default: bool = False) -> bool:
    """Parse booleans from env like '1', 'true', 'yes'."""
    raw = os.environ.get(env_key, str(default))
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}

def _get_list(env_key: str, default=None):
    """Parse comma-separated lists from env (e.g., 'a.com,b.com')."""
    if default is None:
        default = []
    raw = os.environ.get(env_key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


BASE_DIR = Path(__file__).resolve().parent.parent

# Reads DJANGO_DEBUG from env. Defaults to True for dev.
DEBUG = _get_bool("DJANGO_DEBUG", True)

# pytest-django imports settings with pytest already loaded; manage.py test passes "test".
TESTING = "test" in sys.argv or "pytest" in sys.modules


# --- CORS (the admin UI and the public site live on other origins) ---
CORS_ALLOWED_ORIGINS = _get_list("CORS_ORIGIN", ["http://localhost:5173"])
CORS_ALLOW_CREDENTIALS = False

# --- Framing / PDF preview ---------------------------------------------------
# The public site embeds offer PDFs served from /uploads/ in <iframe>/<object>.
X_FRAME_OPTIONS = "ALLOWALL"

_allowed_ancestors = {"'self'"}
_allowed_ancestors.update(CORS_ALLOWED_ORIGINS)

# django-csp v4+ format:
CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "frame-ancestors": sorted(_allowed_ancestors),
    }
}


# SECRET_KEY with safe production enforcement
#    - In dev (DEBUG=True): fallback to a dev key if none provided
#    - In prod (DEBUG=False): require DJANGO_SECRET_KEY
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY") or (
    "django-insecure-7v$0m@q2r!x3k9w%p1c^h8e*l5n#t4y6u&j0b=d2f-g+a" if DEBUG else None
)
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY must be set when DJANGO_DEBUG=False")


# Hosts from env (defaults depend on DEBUG)
ALLOWED_HOSTS = _get_list("DJANGO_ALLOWED_HOSTS", [] if DEBUG else ["127.0.0.1"])


INSTALLED_APPS = [
    # Django core (auth provides password hashers + AnonymousUser for DRF)
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',

    # Third-party
    'rest_framework',
    'rest_framework_simplejwt',
    'corsheaders',
    'drf_yasg',                                   # Swagger/OpenAPI docs
    'csp',

    # Local apps
    'offers',
]

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,  # no Django session login in this service
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Paste: Bearer <token from /admin/login>",
        }
    },
}

MIDDLEWARE = [
    # CORS should be as high as possible
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',

    'django.middleware.security.SecurityMiddleware',
    "csp.middleware.CSPMiddleware",
    'whitenoise.middleware.WhiteNoiseMiddleware',  # Serves static in prod
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "offers.authentication.AdminTokenAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "EXCEPTION_HANDLER": "offers.handlers.api_exception_handler",
    "DEFAULT_THROTTLE_RATES": {"login": os.environ.get("LOGIN_RATE", "10/min")},
    "UNAUTHENTICATED_USER": None,
}

# Disable throttling when running tests
if TESTING:
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {"login": None}

# Admin bearer token: exactly 12 hours, username carried as the identity claim.
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=12),
    "SIGNING_KEY": os.environ.get("JWT_SECRET") or SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "username",
    "USER_ID_CLAIM": "username",
    "UPDATE_LAST_LOGIN": False,
}

ROOT_URLCONF = 'promo_backend.urls'
WSGI_APPLICATION = 'promo_backend.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]


# --- Database (DATABASE_URL when set; SQLite at DB_PATH otherwise) ---
import dj_database_url

DB_URL = os.environ.get("DATABASE_URL", "").strip()
IS_POSTGRES = DB_URL.startswith("postgres://") or DB_URL.startswith("postgresql://")

if DB_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DB_URL,
            conn_max_age=600,
            ssl_require=IS_POSTGRES,  # only apply SSL flag for Postgres URLs
        )
    }
else:
    # SQLite in WAL mode (see offers.apps) gives concurrent readers + one writer.
    DB_PATH = Path(os.environ.get("DB_PATH") or BASE_DIR / "data" / "cms.sqlite3")
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": DB_PATH,
        }
    }

# Salted hashes for ADMIN_PASSWORD_HASH; a fast hasher keeps the test suite quick.
if TESTING:
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static (Swagger UI assets)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# JSON bodies are small; uploads go through multipart file parts.
DATA_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024


# --- Offers ------------------------------------------------------------------
OFFERS_ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "")
OFFERS_ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH", "")

OFFERS_UPLOAD_DIR = Path(os.environ.get("UPLOAD_DIR") or BASE_DIR / "uploads")
OFFERS_ASSET_URL = "/uploads/"
OFFERS_ASSET_MAX_BYTES = 15 * 1024 * 1024

OFFERS_PUBLIC_DEFAULT_LIMIT = 3
OFFERS_PUBLIC_MAX_LIMIT = 50


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "django.request": {  # 500s, 404s with exceptions
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": True,
        },
        "django": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "offers": {
            "handlers": ["console"],
            "level": "INFO",
        },
    },
}
