"""
Contains a helper for opening connections to the Solr cores that
index documents are posted to.
"""
import logging

import pysolr

from django.core.exceptions import ImproperlyConfigured
from django.conf import settings

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


def connect(url=None, using='biblio', **kwargs):
    """
    Return a pysolr.Solr object for the given `url` or, if no `url` is
    given, for the connection named `using` in
    settings.SOLR_CONNECTIONS. The connection's configured TIMEOUT is
    passed along unless a `timeout` kwarg is provided.
    """
    if not url:
        try:
            conn_settings = settings.SOLR_CONNECTIONS[using]
        except KeyError:
            raise ImproperlyConfigured('Solr connection {} does not '
                                       'exist.'.format(using))
        url = conn_settings['URL']
        if 'TIMEOUT' in conn_settings:
            kwargs.setdefault('timeout', conn_settings['TIMEOUT'])
    logger.debug('Connecting to Solr at {}'.format(url))
    return pysolr.Solr(url, **kwargs)
