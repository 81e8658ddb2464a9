import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-key")

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',

    'wr_history.apps.WrHistoryConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'backend.urls'

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

WSGI_APPLICATION = 'backend.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Celery (Redis broker)
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://127.0.0.1:6379/0")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER") == "1"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = "UTC"

REDIS_URL = os.getenv("REDIS_URL", "")

if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
            },
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "wr-history",
        }
    }

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "wr_history": {
            "handlers": ["console"],
            "level": os.getenv("WR_HISTORY_LOG_LEVEL", "INFO"),
        },
    },
}

# WR history data
WR_HISTORY_DATA_ROOT = Path(os.getenv("WR_HISTORY_DATA_ROOT", BASE_DIR / "public"))
WR_HISTORY_DATA_DIR = "data/wr-history-all"
WR_HISTORY_INDEX_PATH = "data/index.json"
WR_HISTORY_REMOTE_BASE_URL = os.getenv("WR_HISTORY_REMOTE_BASE_URL", "")
WR_HISTORY_FETCH_TIMEOUT = int(os.getenv("WR_HISTORY_FETCH_TIMEOUT", "30"))
WR_HISTORY_CACHE_TTL = 60 * 10

# (evidence, evidence_source) pairs allowed to reveal a wipe; None matches any source
WR_HISTORY_WIPE_TRIGGERS = [
    ("record", None),
    ("announcement", "irc_set"),
]
WR_HISTORY_TIME_EPSILON = 0.0001

WR_HISTORY_STEAM_PROFILE_URL = "https://steamcommunity.com/profiles/{steam_id64}"
WR_HISTORY_DEMO_URL = "https://tempus2.xyz/demos/{demo_id}"
WR_HISTORY_DEMO_PLAYER_URL = "https://demos.tf2jump.xyz/?demo={demo_id}"
