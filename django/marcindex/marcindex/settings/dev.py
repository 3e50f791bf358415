# MOST of the settings you'll need to set will be in your .env file,
# which is kept out of version control, or your environment variables.
# See .env.template for instructions.

from .base import *

DEBUG = True
