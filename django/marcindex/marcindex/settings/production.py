from .base import *

# These are the production settings.

if len(ALLOWED_HOSTS) == 0:
    raise_setting_error('ALLOWED_HOSTS')

DEBUG = False

# Production indexing runs should not block forever on a bad document.
FULLTEXT['TIMEOUT'] = int(get_env_variable('FULLTEXT_TIMEOUT', 120))

# The logging setup from base.py will be used by default, but you can set
# up your own loggers here, if you'd like, to override the default setup.
#
# LOGGING = {}
