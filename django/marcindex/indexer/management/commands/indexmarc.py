"""
Contains the `indexmarc` manage.py command.
"""
import contextlib
import logging

import pymarc
import pysolr
import ujson

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from utils import solr
from indexer.exceptions import IndexerFatalError
from indexer.fulltext import FulltextHarvester
from indexer.pipeline import IndexPipeline
from indexer.tracker import UpdateDateTracker

# set up loggers
logger = logging.getLogger('marcindex.custom')
run_logger = logging.getLogger('indexer.file')


def clean_doc(doc):
    """
    Remove empty (None) fields from an index document.
    """
    return {k: v for k, v in doc.items() if v is not None}


class JsonLinesWriter(object):
    """
    Writes each document as one line of JSON to `stream`.
    """
    def __init__(self, stream):
        self.stream = stream

    def write(self, doc):
        self.stream.write('{}\n'.format(ujson.dumps(doc)))

    def finish(self):
        self.stream.flush()


class SolrWriter(object):
    """
    Adds documents to Solr via `conn` (a pysolr.Solr object) in
    batches of `batch_size`, optionally committing at the end.
    """
    def __init__(self, conn, batch_size=100, commit=False):
        self.conn = conn
        self.batch_size = batch_size
        self.commit = commit
        self.docs = []

    def write(self, doc):
        self.docs.append(doc)
        if len(self.docs) >= self.batch_size:
            self.flush()

    def flush(self):
        if self.docs:
            self.conn.add(self.docs, commit=False)
            self.docs = []

    def finish(self):
        self.flush()
        if self.commit:
            self.conn.commit()


class Command(BaseCommand):
    """
    Run an `indexmarc` command from manage.py.

    Reads one or more MARC21 files, converts each record into an index
    document, and either writes the documents out as JSON lines (to
    --output or stdout) or adds them to the Solr core named via --solr.
    First/last indexed dates come from the change tracker unless
    --no-tracker is given; full text is harvested only with --fulltext.
    """
    args = '<file.mrc file.mrc ...>'
    help = 'Index records from one or more MARC21 files'
    pipeline_class = IndexPipeline
    tracker_class = UpdateDateTracker
    harvester_class = FulltextHarvester

    def add_arguments(self, parser):
        parser.add_argument('files', nargs='+', type=str)
        parser.add_argument('--core', type=str,
                            default=settings.INDEXER_DEFAULT_CORE,
                            help='Core name used in the change tracker')
        parser.add_argument('--solr', type=str, default=None,
                            help='Name of a SOLR_CONNECTIONS entry to add '
                                 'documents to')
        parser.add_argument('--output', type=str, default=None,
                            help='File to write JSON lines to (default: '
                                 'stdout)')
        parser.add_argument('--no-tracker', action='store_true',
                            help="Don't record or add first/last indexed "
                                 "dates")
        parser.add_argument('--fulltext', action='store_true',
                            help='Harvest full text from linked documents')
        parser.add_argument('--commit', action='store_true',
                            help='Commit to Solr when done')
        parser.add_argument('--batch-size', type=int, default=100,
                            help='Documents per Solr add request')

    def handle(self, *args, **options):
        harvester = None
        try:
            if options['fulltext']:
                harvester = self.harvester_class()
            if options['no_tracker']:
                tracker_cm = contextlib.nullcontext()
            else:
                tracker_cm = self.tracker_class()
            with tracker_cm as tracker, self.open_writer(options) as writer:
                pipeline = self.pipeline_class(tracker=tracker,
                                               harvester=harvester,
                                               core=options['core'])
                indexed, skipped = self.index_files(options['files'],
                                                    pipeline, writer)
        except KeyboardInterrupt:
            if harvester is not None:
                harvester.cancel()
            raise
        except IndexerFatalError as e:
            run_logger.error('Indexing stopped: {}'.format(e))
            raise CommandError(str(e))
        except pysolr.SolrError as e:
            msg = 'Could not add documents to Solr: {}'.format(e)
            run_logger.error(msg)
            raise CommandError(msg)

        report = 'Done. Records indexed: {}. Records skipped: {}.'.format(
            indexed, skipped)
        run_logger.info(report)
        self.stderr.write(report)

    @contextlib.contextmanager
    def open_writer(self, options):
        """
        Yield the writer documents go to, based on the --solr and
        --output options, and finish it when the block exits cleanly.
        """
        if options['solr']:
            try:
                conn = solr.connect(using=options['solr'])
            except Exception as e:
                raise CommandError('Could not connect to Solr: {}'.format(e))
            writer = SolrWriter(conn, options['batch_size'], options['commit'])
            yield writer
            writer.finish()
        elif options['output']:
            try:
                outfile = open(options['output'], 'w')
            except IOError as e:
                raise CommandError('Could not open output file: {}'.format(e))
            with outfile:
                writer = JsonLinesWriter(outfile)
                yield writer
                writer.finish()
        else:
            writer = JsonLinesWriter(self.stdout)
            yield writer
            writer.finish()

    def read_records(self, filepath):
        """
        Yield each record pymarc can decode from the MARC21 file at
        `filepath`. Records that can't be decoded are logged and
        skipped; None is yielded in their place so they can be counted.
        """
        try:
            marcfile = open(filepath, 'rb')
        except IOError as e:
            raise CommandError('Could not open MARC file: {}'.format(e))
        with marcfile:
            reader = pymarc.MARCReader(marcfile, to_unicode=True,
                                       force_utf8=True)
            for record in reader:
                if record is None:
                    logger.warning('Skipping unreadable record in {}: {}'
                                   ''.format(filepath,
                                             reader.current_exception))
                yield record

    def index_files(self, filepaths, pipeline, writer):
        indexed, skipped = 0, 0
        for filepath in filepaths:
            run_logger.info('Indexing records from {}'.format(filepath))
            for record in self.read_records(filepath):
                if record is None:
                    skipped += 1
                    continue
                doc = clean_doc(pipeline.do(record))
                if not doc.get('id'):
                    logger.warning('Skipping record with no ID in {}'
                                   ''.format(filepath))
                    skipped += 1
                    continue
                writer.write(doc)
                indexed += 1
        return indexed, skipped
