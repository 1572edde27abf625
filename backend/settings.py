"""
Django settings for the Masters Marketplace Backend.
Architecture: Domain-Driven Design (DDD)
UI Theme: Django Unfold (Tailwind CSS)

This settings file is configured for:
1. API: DRF + SimpleJWT bearer tokens, OpenAPI schema (drf-spectacular), Hydra list envelopes.
2. Observability: JSON logs with correlation IDs (django-guid), Sentry error reporting.
3. Configuration: everything environment driven (django-environ) with local defaults.
"""

import environ
import sentry_sdk
from pathlib import Path
from datetime import timedelta

# --- THIRD PARTY INTEGRATIONS ---
from sentry_sdk.integrations.django import DjangoIntegration
from django_guid.integrations import SentryIntegration

# --- ENVIRONMENT CONFIGURATION ---
env = environ.Env(
    DJANGO_DEBUG=(bool, False),
    DJANGO_ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1', 'testserver']),
    CORS_ALLOWED_ORIGINS=(list, ['http://localhost:3000']),
    JWT_ACCESS_MINUTES=(int, 60),
    JWT_REFRESH_DAYS=(int, 7),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.1),
    DJANGO_LOG_LEVEL=(str, 'INFO'),
)
# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent
environ.Env.read_env(BASE_DIR / '.env')

# --- CORE SECURITY SETTINGS ---
SECRET_KEY = env('DJANGO_SECRET_KEY', default='django-insecure-marketplace-dev-key')
DEBUG = env('DJANGO_DEBUG')
ALLOWED_HOSTS = env('DJANGO_ALLOWED_HOSTS')

# --- APPLICATION DEFINITION ---
ROOT_URLCONF = 'backend.urls'
WSGI_APPLICATION = 'backend.wsgi.application'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# --- INSTALLED APPS CONFIGURATION ---
DJANGO_APPS = [
    # Unfold Admin Theme (Must be before admin)
    'unfold',
    'unfold.contrib.filters',
    'unfold.contrib.forms',
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

THIRD_PARTY_APPS = [
    'rest_framework',                # Django Rest Framework (DRF)
    'rest_framework_simplejwt',      # JWT Authentication
    'corsheaders',                   # CORS Handling
    'drf_spectacular',               # OpenAPI Schema (Swagger)
    'django_filters',                # URL Query Parameter Filtering
    'django_guid',                   # Request Correlation ID (Tracing)
]

LOCAL_APPS = [
    # --- 1. CORE & SHARED ---
    'apps.common.core',              # Core Utilities & Base Models
    'apps.common.geography',         # Provinces, Cities, Districts and their children

    # --- 2. USERS & IDENTITY ---
    'apps.users.identity',           # User Model & Profile
    'apps.users.lists',              # Blacklists & Favorites

    # --- 3. MARKETPLACE ---
    'apps.marketplace.tickets',      # Tickets, Categories, Occupations, Units
    'apps.marketplace.chats',        # Chats between clients and masters
    'apps.marketplace.reviews',      # Reviews about clients and masters
    'apps.marketplace.appeals',      # Complaints
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# --- MIDDLEWARE CONFIGURATION ---
MIDDLEWARE = [
    'django_guid.middleware.guid_middleware',               # 1. Correlation ID
    'corsheaders.middleware.CorsMiddleware',                # 2. CORS
    'django.middleware.security.SecurityMiddleware',        # 3. Security
    'django.contrib.sessions.middleware.SessionMiddleware', # 4. Session
    'django.middleware.common.CommonMiddleware',            # 5. Common
    'django.middleware.csrf.CsrfViewMiddleware',            # 6. CSRF
    'django.contrib.auth.middleware.AuthenticationMiddleware', # 7. Auth
    'django.contrib.messages.middleware.MessageMiddleware', # 8. Messages
    'django.middleware.clickjacking.XFrameOptionsMiddleware', # 9. Clickjacking
    'apps.common.utils.middleware.RequestLoggingMiddleware',  # 10. Log Request
]

AUTH_USER_MODEL = 'identity.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# --- DATABASE CONFIGURATION ---
DATABASES = {
    'default': env.db('DATABASE_URL', default=f'sqlite:///{BASE_DIR / "db.sqlite3"}'),
}
DATABASES['default']['ATOMIC_REQUESTS'] = True

# --- CACHE ---
CACHES = {
    'default': env.cache('CACHE_URL', default='locmemcache://'),
}

# --- TEMPLATES ---
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# --- INTERNATIONALIZATION ---
LANGUAGE_CODE = 'ru-ru'
TIME_ZONE = 'Europe/Moscow'
USE_I18N = True
USE_TZ = True

# --- API CONFIGURATION (DRF) ---
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': ('rest_framework_simplejwt.authentication.JWTAuthentication',),
    'DEFAULT_PERMISSION_CLASSES': ('rest_framework.permissions.IsAuthenticatedOrReadOnly',),
    'DEFAULT_FILTER_BACKENDS': ('django_filters.rest_framework.DjangoFilterBackend',),
    'COERCE_DECIMAL_TO_STRING': False,
    'EXCEPTION_HANDLER': 'apps.common.core.api.handlers.custom_exception_handler',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

# --- SWAGGER API DOCS ---
SPECTACULAR_SETTINGS = {
    'TITLE': 'Masters Marketplace API',
    'DESCRIPTION': 'Tickets, reviews, complaints and geography of the masters marketplace',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SWAGGER_UI_SETTINGS': {
        'deepLinking': True,
        'persistAuthorization': True,
    },
}

# --- JWT CONFIGURATION ---
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=env('JWT_ACCESS_MINUTES')),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=env('JWT_REFRESH_DAYS')),
    'UPDATE_LAST_LOGIN': True,
    'AUTH_HEADER_TYPES': ('Bearer',),
    'USER_ID_FIELD': 'id',
}

# --- NETWORK SECURITY (CORS) ---
CORS_ALLOWED_ORIGINS = env('CORS_ALLOWED_ORIGINS')
CORS_ALLOW_CREDENTIALS = True

if CORS_ALLOW_CREDENTIALS:
    for origin in CORS_ALLOWED_ORIGINS:
        if origin == '*' or origin.startswith('*'):
            raise ValueError("SECURITY ERROR: CORS_ALLOWED_ORIGINS cannot contain '*' with credentials enabled.")

# --- BROWSER SECURITY HEADERS ---
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'SAMEORIGIN'

# --- STATIC & MEDIA FILES ---
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = '/media/'
MEDIA_ROOT = env.path('MEDIA_ROOT', default=BASE_DIR / 'media')

# --- OBSERVABILITY & LOGGING (SENTRY + GUID) ---
DJANGO_GUID = {
    'GUID_HEADER_NAME': 'Correlation-ID',
    'VALIDATE_GUID': True,
    'RETURN_HEADER': True,
    'EXPOSE_HEADER': True,
    'INTEGRATIONS': [SentryIntegration()],
    'IGNORE_URLS': ['/favicon.ico'],
    'UUID_FORMAT': 'hex',
}

SENTRY_DSN = env('SENTRY_DSN', default=None)
if SENTRY_DSN:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration()],
        traces_sample_rate=env('SENTRY_TRACES_SAMPLE_RATE'),
        send_default_pii=False,
    )

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'mask_sensitive': {'()': 'apps.common.utils.SensitiveDataFilter'},
        'correlation_id': {'()': 'django_guid.log_filters.CorrelationId'},
    },
    'formatters': {
        'json': {
            '()': 'pythonjsonlogger.jsonlogger.JsonFormatter',
            'format': '%(levelname)s %(asctime)s %(name)s %(correlation_id)s %(message)s %(pathname)s %(lineno)d',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'json',
            'filters': ['mask_sensitive', 'correlation_id'],
        },
    },
    'loggers': {
        'django': {'handlers': ['console'], 'level': env('DJANGO_LOG_LEVEL'), 'propagate': True},
        'apps': {'handlers': ['console'], 'level': 'INFO', 'propagate': True},
        'django_guid': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
    },
}

# --- DJANGO UNFOLD CONFIGURATION ---
UNFOLD = {
    'SITE_TITLE': 'Marketplace Admin',
    'SITE_HEADER': 'Masters Marketplace',
    'SITE_URL': '/',
    'SIDEBAR': {
        'show_search': True,
        'show_all_applications': True,
    },
    'COLORS': {
        'primary': {
            '50': '250 245 255',
            '100': '243 232 255',
            '200': '233 213 255',
            '300': '216 180 254',
            '400': '192 132 252',
            '500': '168 85 247',
            '600': '147 51 234',
            '700': '126 34 206',
            '800': '107 33 168',
            '900': '88 28 135',
            '950': '59 7 100',
        },
    },
}
