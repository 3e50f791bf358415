"""
Track when each record was first and last indexed.

`UpdateDateTracker` keeps a row per (core, record ID) in the tracker
database (see `models.ChangeTracker`). Index runs call `update` for
every record they index, then read `first_indexed`/`last_indexed` off
the tracker to put into the index document.

Use the tracker as a context manager so its database connection is
released when the run ends:

    with UpdateDateTracker() as tracker:
        for record in records:
            doc['first_indexed'] = tracker.get_first_indexed(record)
"""
import logging
import threading

import pytz
from django.conf import settings
from django.db import connections, transaction, DatabaseError
from django.utils import timezone
from django.utils.connection import ConnectionDoesNotExist

from .exceptions import IndexerFatalError
from .extractors import get_latest_transaction
from .fieldspec import get_first_field_value
from .models import ChangeTracker

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


SOLR_DATE_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def format_solr_date(dt):
    """
    Format an aware datetime the way Solr expects dates (in UTC).
    """
    if dt is None:
        return None
    return dt.astimezone(pytz.utc).strftime(SOLR_DATE_FORMAT)


class UpdateDateTracker(object):
    """
    Records first/last indexed dates in the tracker database.

    `using` is the database alias to use (default:
    settings.INDEXER_TRACKER_DATABASE). `clock` is a callable that
    returns the current (aware) datetime.

    After each `index` or `update` call, the `first_indexed`,
    `last_indexed`, `last_record_change` and `deleted` attributes hold
    the values for the record just processed.
    """
    def __init__(self, using=None, clock=None):
        self.using = using or getattr(settings, 'INDEXER_TRACKER_DATABASE',
                                      'tracker')
        self.clock = clock or timezone.now
        self.shutting_down = False
        self._connected = False
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        self.core = None
        self.record_id = None
        self.first_indexed = None
        self.last_indexed = None
        self.last_record_change = None
        self.deleted = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def connect(self):
        """
        Open the tracker database connection, if it isn't open yet.
        Raises IndexerFatalError if the database is unavailable.
        """
        if self._connected:
            return
        try:
            connections[self.using].ensure_connection()
        except (ConnectionDoesNotExist, DatabaseError) as e:
            msg = ('Unable to connect to the tracker database "{}": '
                   '{}'.format(self.using, e))
            logger.error(msg)
            raise IndexerFatalError(msg)
        self._connected = True

    def close(self):
        """
        Flag that the tracker is shutting down and close its database
        connection.
        """
        self.shutting_down = True
        if self._connected:
            connections[self.using].close()
            self._connected = False

    def index(self, core, record_id, latest_transaction):
        """
        Record that `record_id` in `core` is being indexed now. Returns
        True if the tracker row was created or changed. Database errors
        propagate.
        """
        with self._lock:
            self.connect()
            with transaction.atomic(using=self.using):
                manager = ChangeTracker.objects.db_manager(self.using)
                row, changed = manager.record_transaction(
                    core, record_id, latest_transaction, self.clock())
            self.core, self.record_id = core, record_id
            self.first_indexed = row.first_indexed
            self.last_indexed = row.last_indexed
            self.last_record_change = row.last_record_change
            self.deleted = row.deleted
        return changed

    def update(self, core, record_id, latest_transaction):
        """
        Like `index`, but a database error is fatal (raising
        IndexerFatalError) unless the tracker is shutting down, in
        which case it's only logged. Returns the tracker.
        """
        try:
            self.index(core, record_id, latest_transaction)
        except DatabaseError as e:
            if self.shutting_down:
                logger.warning('Tracker database error during shutdown: '
                               '{}'.format(e))
                self.reset()
            else:
                msg = 'Unexpected tracker database error: {}'.format(e)
                logger.error(msg)
                raise IndexerFatalError(msg)
        return self

    def update_for_record(self, record, field_spec='001', core=None):
        """
        Update the tracker for a MARC `record`, using the first value
        `field_spec` selects as the record ID. Returns the tracker, or
        None if the record has no ID.
        """
        core = core or getattr(settings, 'INDEXER_DEFAULT_CORE', 'biblio')
        record_id = get_first_field_value(record, field_spec)
        if record_id is None:
            logger.warning('Cannot track record with no {} value.'
                           ''.format(field_spec))
            return None
        return self.update(core, record_id, get_latest_transaction(record))

    def get_first_indexed(self, record, field_spec='001', core=None):
        """
        Update the tracker for `record` and return its first indexed
        date as a Solr date string.
        """
        if self.update_for_record(record, field_spec, core) is None:
            return None
        return format_solr_date(self.first_indexed)

    def get_last_indexed(self, record, field_spec='001', core=None):
        """
        Update the tracker for `record` and return its last indexed
        date as a Solr date string.
        """
        if self.update_for_record(record, field_spec, core) is None:
            return None
        return format_solr_date(self.last_indexed)
