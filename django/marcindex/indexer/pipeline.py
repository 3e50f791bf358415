"""
Defines the pipeline for converting MARC records into documents for
indexing in Solr.
"""

from django.conf import settings

from . import extractors as ex, callnumber_fields as cn, coordinates as geo
from .fieldspec import get_field_list, get_first_field_value
from .tracker import format_solr_date


def _or_none(value):
    return value if value else None


class IndexPipeline(object):
    """
    Holds the methods that build the document sent to Solr for one
    MARC record.

    To use: add a method to this class that uses `self.marc_record`
    (a pymarc Record) to compile whatever info you need, and return a
    dictionary, where each key is the Solr field that gets the
    corresponding value. Empty values should be None. (Keys should be
    unique across methods.)

    Name the method using the `prefix` class attr--default is 'get_'.
    Then add the suffix to the `fields` list in the order you want
    processing to happen.

    Use the `do` method to run a record through the pipeline and get a
    fully-populated dict.

    `tracker` (an UpdateDateTracker) and `harvester` (a
    FulltextHarvester) are optional; without them, the `index_dates`
    and `fulltext` steps add nothing. `field_specs` overrides any of
    the field specs from settings.INDEXER_FIELD_SPECS.
    """
    fields = [
        'id', 'pub_info', 'illustrated', 'call_number_info', 'dewey_info',
        'geo_info', 'facets_info', 'index_dates', 'fulltext'
    ]
    prefix = 'get_'
    facet_fields = ('topic_facet', 'genre_facet', 'geographic_facet',
                    'era_facet')

    def __init__(self, tracker=None, harvester=None, core=None,
                 field_specs=None):
        self.tracker = tracker
        self.harvester = harvester
        self.core = core or getattr(settings, 'INDEXER_DEFAULT_CORE',
                                    'biblio')
        self.field_specs = dict(settings.INDEXER_FIELD_SPECS)
        self.field_specs.update(field_specs or {})
        self.marc_record = None
        self.bundle = {}

    def set_up(self, marc_record=None):
        self.bundle = {}
        self.marc_record = marc_record

    def do(self, marc_record, fields=None):
        """
        This is the "main" method for objects of this class. Use this
        to run a pymarc Record through the pipeline (or part of the
        pipeline, if you provide a list of `fields`). Returns a dict
        composed of all keys returned by the individual methods.
        """
        self.set_up(marc_record=marc_record)
        for fname in (fields or self.fields):
            method_name = '{}{}'.format(self.prefix, fname)
            result = getattr(self, method_name)()
            for k, v in result.items():
                existing = self.bundle.get(k)
                if isinstance(existing, list) and isinstance(v, list):
                    existing.extend(v)
                else:
                    self.bundle[k] = v
        return self.bundle

    def spec(self, name):
        return self.field_specs[name]

    def get_id(self):
        return {'id': get_first_field_value(self.marc_record,
                                            self.spec('id'))}

    def get_pub_info(self):
        r = self.marc_record
        return {
            'publisher': _or_none(ex.get_publishers(r)),
            'publishDate': _or_none(ex.get_dates(r)),
            'publishDateSort': ex.get_first_date(r),
        }

    def get_illustrated(self):
        return {'illustrated': ex.is_illustrated(self.marc_record)}

    def get_call_number_info(self):
        r = self.marc_record
        local, type_sf = (self.spec('local_callnumber'),
                          self.spec('local_callnumber_type_subfield'))
        lc_type = self.spec('local_callnumber_lc_type')
        dewey_type = self.spec('local_callnumber_dewey_type')
        return {
            'callnumber-sort': _or_none(
                cn.get_lc_sortable(r, self.spec('lc_callnumber'))),
            'callnumber-lc-local': _or_none(
                cn.get_call_number_by_type(r, local, type_sf, lc_type)),
            'callnumber-sort-local': cn.get_lc_sortable_by_type(
                r, local, type_sf, lc_type),
            'dewey-sort-local': cn.get_dewey_sortable_by_type(
                r, local, type_sf, dewey_type),
        }

    def get_dewey_info(self):
        r, spec = self.marc_record, self.spec('dewey_callnumber')
        return {
            'dewey-hundreds': cn.get_dewey_number(r, spec, '100'),
            'dewey-tens': cn.get_dewey_number(r, spec, '10'),
            'dewey-ones': cn.get_dewey_number(r, spec, '1'),
            'dewey-full': cn.get_dewey_searchable(r, spec),
            'dewey-sort': cn.get_dewey_sortable(r, spec),
            'dewey-sort-browse': cn.get_dewey_sortables(r, spec),
            'dewey-raw': _or_none(get_field_list(r, spec)),
        }

    def get_geo_info(self):
        r = self.marc_record
        return {
            'long_lat': _or_none(geo.get_all_coordinates(r)),
            'long_lat_display': _or_none(geo.get_display_coordinates(r)),
            'long_lat_point': _or_none(geo.get_point_coordinates(r)),
        }

    def get_facets_info(self):
        r = self.marc_record
        return {fname: ex.normalize_trailing_punctuation(r, self.spec(fname))
                for fname in self.facet_fields}

    def get_index_dates(self):
        if self.tracker is None:
            return {}
        tracker = self.tracker.update_for_record(
            self.marc_record, self.spec('id'), self.core)
        if tracker is None:
            return {'first_indexed': None, 'last_indexed': None}
        return {
            'first_indexed': format_solr_date(tracker.first_indexed),
            'last_indexed': format_solr_date(tracker.last_indexed),
        }

    def get_fulltext(self):
        if self.harvester is None:
            return {}
        text = self.harvester.get_fulltext(self.marc_record,
                                           self.spec('fulltext'))
        return {'fulltext': _or_none(text)}
