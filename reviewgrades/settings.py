"""
Django settings for the reviewgrades project.

Deployment-specific values come from the environment; the defaults are for
local development.
"""
import os

BASE_DIR_LOCAL = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.environ.get('REVIEWGRADES_SECRET_KEY',
                            'development-only-secret-key')
DEBUG = os.environ.get('REVIEWGRADES_DEBUG', '1') == '1'

ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']  # only checked in production

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Our apps
    'basic',
    'rubric',
    'grades',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'reviewgrades.urls'

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

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('REVIEWGRADES_DB_NAME',
                               BASE_DIR_LOCAL + os.sep + 'db.sqlite3'),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

SESSION_ENGINE = 'django.contrib.sessions.backends.db'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_TZ = True

STATIC_URL = '/static/'

# Grades
# The computed total score is capped at this value (unless overridden)
GRADES_MAX_TOTAL_SCORE = 100
# Decimal places used for every percentage
GRADES_PERCENT_PLACES = 2
# True: a team's average is that of the last member processed (old reports)
GRADES_LAST_MEMBER_TEAM_AVERAGE = False


LOG_FILENAME = os.environ.get('REVIEWGRADES_LOG_FILE',
                              BASE_DIR_LOCAL + os.sep + 'logfile.log')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'file': {
            'level': 'DEBUG',
            'class': 'logging.FileHandler',
            'filename': LOG_FILENAME,
            'formatter': 'verbose',
            'delay': True,
        },
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'formatters': {
        'verbose': {
            'format': "%(levelname)s :: %(funcName)s:%(lineno)s :: %(asctime)s :: %(message)s",
            },
        'simple': {
            'format': '%(levelname)s %(message)s'
            },
        },
    'loggers': {
        'django.request': {
            'handlers': ['file', 'console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'grades': {
            'handlers': ['file', ],
            'level': 'DEBUG',
        },
        'basic': {
            'handlers': ['file', ],
            'level': 'DEBUG',
        },
        'rubric': {
            'handlers': ['file', ],
            'level': 'DEBUG',
        },
    },
}
