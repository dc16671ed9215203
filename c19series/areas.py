"""The area registry: one row per country or province we track.

    country,province,area_id,latitude,longitude,population,lockdown_date,colour

area_id is the stable key used by the persisted series file.  The colour
column may be missing in older registries.
"""
import logging

from c19series.area import AreaSeries
from c19series.csv import expect_header
from c19series.date import parse_date
from c19series.errors import ParseError, SchemaError

logger = logging.getLogger(__name__)

HEADER = ['country', 'province', 'area_id', 'latitude', 'longitude',
        'population', 'lockdown_date']
COLOUR = 'colour'


def _number(row, i, convert, default):
    s = row[i].strip() if i < len(row) else ''
    if s == '': return default
    try: return convert(s)
    except ValueError:
        raise ParseError(f"Invalid {HEADER[i]} {s!r} in area row {row}")


def read_area_row(row):
    if len(row) < len(HEADER): raise ParseError(f"Short area row {row}")
    try: area_id = int(row[2])
    except ValueError: raise ParseError(f"Invalid area_id in area row {row}")
    lockdown = None
    if row[6].strip():
        lockdown = parse_date(row[6].strip())
        if lockdown is None: raise ParseError(f"Invalid lockdown_date in area row {row}")
    return AreaSeries(area_id,
            country=row[0].strip(),
            province=row[1].strip(),
            latitude=_number(row, 3, float, 0.0),
            longitude=_number(row, 4, float, 0.0),
            population=_number(row, 5, int, 0),
            lockdown_date=lockdown,
            color=row[7].strip() if len(row) > 7 else '')


def parse_areas(rows, name='areas'):
    """Returns one empty series per valid registry row."""
    expect_header(rows, HEADER, name)
    extra = [h.strip() for h in rows[0][len(HEADER):]]
    if extra not in ([], [COLOUR]):
        raise SchemaError(f"Invalid header in {name}: {rows[0]}")
    areas = []
    for row in rows[1:]:
        if not any(x.strip() for x in row): continue
        try: areas.append(read_area_row(row))
        except ParseError as e:
            logger.warning("skipping area row: %s", e)
    logger.info("read %d areas from %s", len(areas), name)
    return areas
