"""
Harvest full text from documents linked from MARC records (e.g. via
856$u) using an external extraction tool: Aperture or Apache Tika.

Which tool is used comes from settings.FULLTEXT. When no tool is
configured, harvesting is off and no external process is ever run.
"""
import logging
import os
import subprocess
import tempfile
import threading
import xml.etree.ElementTree as ET
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from .exceptions import IndexerFatalError
from .fieldspec import get_field_list
from .stringparsers import sanitize_fulltext

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


PARSERS = ('aperture', 'tika')
NO_PARSER = 'none'

# How often (in seconds) a running process is checked for
# cancellation.
POLL_INTERVAL = 0.5


def get_parser_settings(config=None):
    """
    Return a (parser, path) tuple naming the extraction tool to use.

    An explicit config['PARSER'] ('aperture' or 'tika', any case) wins.
    Otherwise the first tool with a path configured is used, Aperture
    first. If neither applies, returns ('none', None).
    """
    config = settings.FULLTEXT if config is None else config
    parser = (config.get('PARSER') or '').lower() or None
    paths = {'aperture': config.get('APERTURE_PATH'),
             'tika': config.get('TIKA_PATH')}
    for name in PARSERS:
        if parser == name or (parser is None and paths[name]):
            return (name, paths[name])
    return (NO_PARSER, None)


class FulltextHarvester(object):
    """
    Runs the configured extraction tool against document URLs.

    External processes run through a thread pool with at most
    `max_workers` at a time; each one is killed if it runs longer than
    `timeout` seconds or if `cancel` is called. `popen` is the callable
    used to start processes (subprocess.Popen by default).
    """
    def __init__(self, config=None, popen=None):
        config = settings.FULLTEXT if config is None else config
        self.parser, self.path = get_parser_settings(config)
        self.extension = config.get('EXTENSION')
        self.timeout = config.get('TIMEOUT') or 300
        self.max_workers = config.get('MAX_WORKERS') or 1
        self.popen = popen or subprocess.Popen
        self._cancelled = threading.Event()
        if self.enabled and not self.path:
            msg = ('Full-text parser "{}" is configured without a path.'
                   ''.format(self.parser))
            logger.error(msg)
            raise IndexerFatalError(msg)

    @property
    def enabled(self):
        return self.parser != NO_PARSER

    @property
    def cancelled(self):
        return self._cancelled.is_set()

    def cancel(self):
        """
        Stop harvesting: running processes are killed and no new ones
        are started.
        """
        logger.info('Cancelling full-text harvesting.')
        self._cancelled.set()

    def get_urls(self, record, field_spec='856u', extension=None):
        """
        Return the document URLs `field_spec` selects from `record`,
        with spaces encoded and, if `extension` is given, only URLs
        ending with that extension.
        """
        urls = [u.replace(' ', '%20')
                for u in get_field_list(record, field_spec)]
        if extension:
            urls = [u for u in urls if u.endswith(extension)]
        return urls

    def get_fulltext(self, record, field_spec='856u', extension=None):
        """
        Return the full text of every document linked from `record`,
        concatenated in URL order, or None if harvesting is off.
        `extension` defaults to the configured EXTENSION.
        """
        if not self.enabled:
            return None
        urls = self.get_urls(record, field_spec, extension or self.extension)
        if not urls:
            return ''
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            return ''.join(executor.map(self.harvest, urls))
        except BaseException:
            # Interrupted (e.g. KeyboardInterrupt): running processes
            # are killed at their next poll and queued URLs never start.
            self.cancel()
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def harvest(self, url):
        """
        Harvest the text of one document with the configured tool.
        Returns '' if harvesting fails.
        """
        if self.cancelled:
            return ''
        method = getattr(self, 'harvest_with_{}'.format(self.parser))
        return method(url)

    def harvest_with_aperture(self, url):
        try:
            fd, outfile = tempfile.mkstemp(prefix='apt', suffix='.txt')
            os.close(fd)
        except OSError as e:
            msg = ('Unable to create temporary file for full text harvest: '
                   '{}'.format(e))
            logger.error(msg)
            raise IndexerFatalError(msg)

        try:
            if self.run_command([self.path, '-o', outfile, '-x', url]) is None:
                return ''
            text = self.parse_aperture_output(outfile)
        finally:
            if os.path.exists(outfile):
                os.remove(outfile)
        return text

    def parse_aperture_output(self, filename):
        """
        Return the text of the first `plainTextContent` element in the
        XML file Aperture wrote, or '' if it can't be parsed.
        """
        with open(filename, encoding='utf-8', errors='replace') as fh:
            content = ''.join(sanitize_fulltext(line.rstrip('\r\n'))
                              for line in fh)
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.error('Problem parsing Aperture XML -- {}'.format(e))
            return ''
        for element in root.iter():
            if element.tag.rsplit('}', 1)[-1] == 'plainTextContent':
                return ''.join(element.itertext())
        return ''

    def harvest_with_tika(self, url):
        output = self.run_command(['java', '-jar', self.path, '-t', '-eUTF8',
                                   url])
        if output is None:
            return ''
        return sanitize_fulltext(''.join(output.splitlines()))

    def run_command(self, args):
        """
        Run `args` as an external process and return its decoded
        stdout, or None if it fails, times out, or is cancelled.
        """
        if self.cancelled:
            return None
        try:
            proc = self.popen(args, stdout=subprocess.PIPE,
                              stderr=subprocess.PIPE)
        except OSError as e:
            logger.error('Problem executing {} -- {}'.format(args[0], e))
            return None

        waited = 0
        while True:
            try:
                stdout, stderr = proc.communicate(timeout=POLL_INTERVAL)
                break
            except subprocess.TimeoutExpired:
                waited += POLL_INTERVAL
                if self.cancelled or waited >= self.timeout:
                    proc.kill()
                    proc.communicate()
                    reason = 'cancelled' if self.cancelled else 'timed out'
                    logger.error('{} {} on {}'.format(args[0], reason,
                                                      args[-1]))
                    return None

        if proc.returncode != 0:
            logger.error('{} exited with status {} on {}: {}'.format(
                args[0], proc.returncode, args[-1],
                (stderr or b'').decode('utf-8', 'replace').strip()))
            return None
        return (stdout or b'').decode('utf-8', 'replace')
