"""
Parse geographic coordinates from MARC 034 fields.

034 $d, $e, $f and $g hold the west, east, north and south bounds of
the area a resource covers. Each may be given in hemisphere-degrees
form (`W0963000`, `N45.5`) or as signed decimal degrees (`-96.5`).
"""
import logging
import re
from collections import namedtuple

from .fieldspec import iter_data_fields

# set up logger, for debugging
logger = logging.getLogger('marcindex.custom')


HDMS_HDD_REGEX = r'^([eEwWnNsS])(\d+(\.\d+)?)$'
PMDD_REGEX = r'^([+-])(\d+(\.\d+)?)$'
DMS_REGEX = r'^([eEwWnNsS])(\d{3})(\d{2})(\d{2})$'

ENVELOPE_REGEX = r'^ENVELOPE\(([^,]+),([^,]+),([^,]+),([^,]+)\)$'


def coordinate_to_decimal(value):
    """
    Convert a fixed-width hemisphere-degrees-minutes-seconds string
    (`HDDDMMSS`, e.g. `W0963000`) to decimal degrees. Western and
    southern coordinates are negative. Returns None if `value` isn't
    in that form.
    """
    match = re.match(DMS_REGEX, value or '')
    if not match:
        return None
    hemisphere = match.group(1).upper()
    degrees, minutes, seconds = (int(g) for g in match.group(2, 3, 4))
    coordinate = degrees + (minutes / 60.0) + (seconds / 3600.0)
    if hemisphere in ('W', 'S'):
        coordinate *= -1
    return coordinate


def convert_coordinate(value):
    """
    Convert one 034 coordinate value to signed decimal degrees, or
    return None if it isn't a recognizable coordinate.

    Hemisphere values (`N45.5`, `W096.5`) are plain degrees unless the
    number is out of range for the hemisphere (> 90 for N/S, > 180 for
    E/W), in which case it's read as degrees-minutes-seconds (with
    two-digit-degree N/S latitudes zero-padded first). Otherwise the
    value may be signed decimal degrees (`+45.5`, `-96.5`).
    """
    value = (value or '').strip()
    match = re.match(HDMS_HDD_REGEX, value)
    if match:
        hemisphere, number = match.group(1).upper(), match.group(2)
        degrees = float(number)
        if hemisphere in ('N', 'S'):
            if degrees > 90:
                if len(number) == 6:
                    value = '{}0{}'.format(hemisphere, number)
                return coordinate_to_decimal(value)
            return -degrees if hemisphere == 'S' else degrees
        if degrees > 180:
            return coordinate_to_decimal(value)
        return -degrees if hemisphere == 'W' else degrees

    match = re.match(PMDD_REGEX, value)
    if match:
        degrees = float(match.group(2))
        return -degrees if match.group(1) == '-' else degrees
    return None


def validate_coordinates(west, east, north, south):
    """
    True if the four bounds describe a valid bounding box: none are
    missing, longitudes are within -180 to 180, latitudes within -90 to
    90, north isn't below south, and west isn't east of east.
    """
    if None in (west, east, north, south):
        return False
    if not all(-180.0 <= lon <= 180.0 for lon in (west, east)):
        return False
    if not all(-90.0 <= lat <= 90.0 for lat in (north, south)):
        return False
    return north >= south and west <= east


class Envelope(namedtuple('Envelope', ['west', 'east', 'north', 'south'])):
    """
    A geographic bounding box, stored in the WENS order the Solr
    spatial `ENVELOPE(minX, maxX, maxY, minY)` syntax uses.
    """
    __slots__ = ()

    def is_valid(self):
        return validate_coordinates(*self)

    def __str__(self):
        return 'ENVELOPE({},{},{},{})'.format(*self)

    @classmethod
    def from_string(cls, envelope_str):
        """
        Parse an `ENVELOPE(w,e,n,s)` string. Raises ValueError if the
        string isn't in that form.
        """
        match = re.match(ENVELOPE_REGEX, (envelope_str or '').strip())
        if not match:
            raise ValueError('Not an envelope string: {}'.format(envelope_str))
        return cls(*(float(g) for g in match.groups()))


def _first_subfield(field, code):
    values = field.get_subfields(code)
    return values[0] if values else None


def _raw_bounds(field):
    return [_first_subfield(field, code) for code in 'defg']


def _is_blank(value):
    return value is None or not value.strip()


def get_all_coordinates(record):
    """
    Return a list of `ENVELOPE(w,e,n,s)` strings, one for each 034
    field on `record` that has a valid set of coordinates. When a field
    gives only one longitude and one latitude (a point), that point is
    used for both sides of the envelope.
    """
    envelopes = []
    for field in iter_data_fields(record, '034'):
        d, e, f, g = _raw_bounds(field)
        if not _is_blank(d) and _is_blank(e) and not _is_blank(f) \
                and _is_blank(g):
            e, g = d, f
        if not _is_blank(e) and _is_blank(d) and not _is_blank(g) \
                and _is_blank(f):
            d, f = e, g
        envelope = Envelope(*(convert_coordinate(v) for v in (d, e, f, g)))
        if envelope.is_valid():
            envelopes.append(str(envelope))
        else:
            logger.debug('Skipping invalid coordinates {} on record '
                         '{}'.format(tuple(envelope), _record_label(record)))
    return envelopes


def get_point_coordinates(record):
    """
    Return a list of `long,lat` strings, one for each 034 field on
    `record` that describes a single point: either only one longitude
    and one latitude are given, or west equals east and north equals
    south.
    """
    points = []
    for field in iter_data_fields(record, '034'):
        d, e, f, g = _raw_bounds(field)
        pair = None
        if not _is_blank(d) and _is_blank(e) and not _is_blank(f) \
                and _is_blank(g):
            pair = (d, f)
        elif not _is_blank(e) and _is_blank(d) and not _is_blank(g) \
                and _is_blank(f):
            pair = (e, g)
        elif not _is_blank(d) and d == e and not _is_blank(f) and f == g:
            pair = (d, f)
        if pair is None:
            continue
        longitude, latitude = (convert_coordinate(v) for v in pair)
        if longitude is None or latitude is None:
            logger.debug('Skipping unparseable point {} on record '
                         '{}'.format(pair, _record_label(record)))
            continue
        points.append('{},{}'.format(longitude, latitude))
    return points


def get_display_coordinates(record):
    """
    Return a list of the raw `d e f g` coordinate strings from each 034
    field on `record` that has at least one of those subfields. Missing
    subfields are left empty.
    """
    coordinates = []
    for field in iter_data_fields(record, '034'):
        bounds = _raw_bounds(field)
        if any(b is not None for b in bounds):
            coordinates.append(' '.join(b or '' for b in bounds))
    return coordinates


def _record_label(record):
    fields = record.get_fields('001')
    return fields[0].data if fields else '(no 001)'
