import os
import tempfile

# Tests run against throwaway SQLite databases, so the settings that
# base.py requires get harmless defaults here.
os.environ.setdefault('SECRET_KEY', 'marcindex-test-secret-key')
os.environ.setdefault('LOG_FILE_DIR', tempfile.gettempdir())
os.environ.setdefault('TRACKER_DATABASE_DSN', 'sqlite:///{}'.format(
    os.path.join(tempfile.gettempdir(), 'marcindex_tracker.sqlite3')))

from .base import *

DEBUG = True
TESTING = True

TIME_ZONE = 'America/Chicago'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': get_env_variable('TEST_DEFAULT_DB_NAME', ':memory:'),
    },
    'tracker': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': get_env_variable('TEST_TRACKER_DB_NAME', ':memory:'),
    },
}

# Full-text harvesting is off unless a test turns it on.
FULLTEXT = {
    'PARSER': None,
    'APERTURE_PATH': None,
    'TIKA_PATH': None,
    'EXTENSION': None,
    'TIMEOUT': 5,
    'MAX_WORKERS': 2,
}

SOLR_CONNECTIONS['biblio']['URL'] = get_env_variable(
    'TEST_SOLR_BIBLIO_URL', 'http://127.0.0.1:8883/solr/biblio')
