from pathlib import Path

import pymysql
pymysql.install_as_MySQLdb()

import os, json
from django.core.exceptions import ImproperlyConfigured

from datetime import timedelta

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# secret_key setting
secret_file = os.path.join(BASE_DIR, 'secrets.json')

secrets = {}
if os.path.exists(secret_file):
    with open(secret_file) as f:
        secrets = json.loads(f.read())

_MISSING = object()

def get_secret(setting, default=_MISSING, secrets=secrets):
# secrets.json -> 환경변수 -> 기본값 순서로 찾고, 어디에도 없으면 예외를 반환
    if setting in secrets:
        return secrets[setting]
    if setting in os.environ:
        return os.environ[setting]
    if default is not _MISSING:
        return default
    error_msg = "Set the {} environment variable".format(setting)
    raise ImproperlyConfigured(error_msg)


ENV = os.getenv('ENV', 'local')  # 기본값은 'local'
IS_PRODUCTION = ENV == 'production'

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = not IS_PRODUCTION

ALLOWED_HOSTS = [
    '127.0.0.1',
    'localhost',
    'testserver',
    'tapmove.co.kr',
    'www.tapmove.co.kr',
]


# Application definition

DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

PROJECT_APPS = [
    'accounts',
    'siteconfig',
    'seminars',
    'reviews',
    'orders',
    'notifications',
    'dashboard',
]

THIRD_PARTY_APPS = [
    "corsheaders",
    'rest_framework',
]

INSTALLED_APPS = DJANGO_APPS + PROJECT_APPS + THIRD_PARTY_APPS

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ALLOWED_ORIGINS = [
    'https://tapmove.co.kr',
    'https://www.tapmove.co.kr',
]
CSRF_TRUSTED_ORIGINS = ALLOWED_ORIGINS.copy()

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

ROOT_URLCONF = 'config.urls'

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

WSGI_APPLICATION = 'config.wsgi.application'

# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

DB_NAME = get_secret("DB_NAME", None)

# DB_NAME이 없으면 로컬/테스트용 sqlite 사용
if DB_NAME:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.mysql',
            'NAME': DB_NAME,
            'USER': get_secret("USER"),
            'PASSWORD': get_secret("DB_PW"),
            'HOST': get_secret("HOST", "localhost"),
            'PORT': get_secret("PORT", "3306"),
            'OPTIONS': {'charset': 'utf8mb4'},
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'tapmove.sqlite3',
        }
    }

# Password validation
# https://docs.djangoproject.com/en/5.2/ref/settings/#auth-password-validators

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'ko-kr'

TIME_ZONE = 'Asia/Seoul'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/5.2/howto/static-files/

STATIC_URL = 'static/'

# Default primary key field type
# https://docs.djangoproject.com/en/5.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

SECRET_KEY = get_secret("SECRET_KEY", None if IS_PRODUCTION else "tapmove-local-secret-key")
if not SECRET_KEY:
    raise ImproperlyConfigured("Set the SECRET_KEY environment variable")

CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "https://tapmove.co.kr",
    "https://www.tapmove.co.kr",
]

### LOGIN ###

AUTH_USER_MODEL = 'accounts.User'

# 세션 기반 로그인 (관리자 대시보드)
SESSION_ENGINE = 'django.contrib.sessions.backends.db'
SESSION_COOKIE_AGE = int(timedelta(hours=24).total_seconds())
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = IS_PRODUCTION
CSRF_COOKIE_SECURE = IS_PRODUCTION

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'accounts.authentication.SessionIdentityAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.AllowAny',
    ),
    'DEFAULT_THROTTLE_CLASSES': (
        'rest_framework.throttling.AnonRateThrottle',
        'rest_framework.throttling.UserRateThrottle',
    ),
    'DEFAULT_THROTTLE_RATES': {
        'anon': '400/hour',
        'user': '1000/hour',
        'strict': '20/hour',    # 로그인/비밀번호 확인 등 민감한 엔드포인트
    },
    'EXCEPTION_HANDLER': 'common.exceptions.envelope_exception_handler',
    # X-Forwarded-For는 신뢰하는 프록시 수만큼만 인정 (0이면 REMOTE_ADDR)
    'NUM_PROXIES': int(get_secret("NUM_PROXIES", 0)),
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'tapmove',
    }
}

# 비밀번호(passcode) 연속 실패 시 잠금
PASSCODE_MAX_FAILURES = int(get_secret("PASSCODE_MAX_FAILURES", 5))
PASSCODE_LOCKOUT_SECONDS = int(get_secret("PASSCODE_LOCKOUT_SECONDS", 15 * 60))

# Toss Payments (테스트 키가 기본값)
TOSS_CLIENT_KEY = get_secret("TOSS_CLIENT_KEY", "test_ck_docs_Ovk5rk1EwkEbP0W43n07xlzm")
TOSS_SECRET_KEY = get_secret("TOSS_SECRET_KEY", "test_sk_docs_e92LAa5PVb3ZdNYfJuK4G57mAYX4")
TOSS_API_BASE_URL = "https://api.tosspayments.com/v1"

# SMS (CoolSMS)
SMS_PROVIDER = get_secret("SMS_PROVIDER", "")
SMS_API_KEY = get_secret("SMS_API_KEY", "")
SMS_API_SECRET = get_secret("SMS_API_SECRET", "")
SMS_SENDER_NUMBER = get_secret("SMS_SENDER_NUMBER", "")
ADMIN_PHONE = get_secret("ADMIN_PHONE", "")

# Email (SendGrid)
SENDGRID_API_KEY = get_secret("SENDGRID_API_KEY", "")
NOTIFICATION_FROM_EMAIL = get_secret("NOTIFICATION_FROM_EMAIL", "noreply@tapmove.co.kr")
ADMIN_EMAIL = get_secret("ADMIN_EMAIL", "admin@tapmove.com")

# 알림은 커밋 이후 백그라운드 스레드에서 발송
NOTIFICATIONS_ASYNC = str(get_secret("NOTIFICATIONS_ASYNC", "true")).lower() == "true"

# AWS
AWS_ACCESS_KEY_ID = get_secret("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY = get_secret("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION = 'ap-northeast-2'

# S3
AWS_STORAGE_BUCKET_NAME = get_secret("AWS_STORAGE_BUCKET_NAME", 'tapmove-assets')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        **{
            app: {'handlers': ['console'], 'level': 'INFO', 'propagate': False}
            for app in PROJECT_APPS + ['common', 'moderation']
        },
        # 401/403/429 같은 클라이언트 오류는 경고로 남기지 않는다
        'django.request': {'handlers': ['console'], 'level': 'ERROR', 'propagate': False},
    },
}
