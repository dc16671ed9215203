"""Adapters for the Johns Hopkins CSSE feeds.

Four shapes, all inconsistent with each other:

- Global wide time series, one file per metric:
    Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,...
- US wide time series at county level, one file per metric, where the
  deaths file has an extra Population column before the dates:
    UID,iso2,iso3,code3,FIPS,Admin2,Province_State,Country_Region,...,1/22/20,...
- Daily country snapshot (today only):
    Country_Region,Last_Update,Lat,Long_,Confirmed,Deaths,Recovered,Active
- Daily state snapshot (today only):
    FIPS,Province_State,Country_Region,Last_Update,Lat,Long_,Confirmed,Deaths,Recovered,Active

Each adapter has a parse step, which only looks at the rows and raises
SchemaError before anything is touched, and an apply step which mutates
the series under the caller's lock.
"""
import collections
import logging
import os

from c19series.csv import csv_as_dicts, expect_header
from c19series.date import as_utc, parse_header_date, parse_timestamp, utc_now
from c19series.day import KINDS
from c19series.errors import NotFound, ParseError, SchemaError

logger = logging.getLogger(__name__)

TIME_SERIES_HEADER = ['Province/State', 'Country/Region', 'Lat', 'Long']
COUNTRY_CASES_COLUMNS = ['Country_Region', 'Last_Update', 'Lat', 'Long_',
        'Confirmed', 'Deaths', 'Recovered', 'Active']
STATE_CASES_COLUMNS = ['Province_State', 'Country_Region', 'Last_Update',
        'Confirmed', 'Deaths', 'Recovered', 'Active']

OTHER = ('Other', '')
  # Rows we can't place go here so that global totals still add up.

SeriesRow = collections.namedtuple('SeriesRow', ['country', 'province', 'values'])
TimeSeriesBatch = collections.namedtuple('TimeSeriesBatch', ['kind', 'start_date', 'rows'])
Snapshot = collections.namedtuple('Snapshot',
        ['country', 'province', 'updated', 'deaths', 'confirmed', 'recovered'])


# --------------------------------------------------
# Field readers

def kind_for_path(path):
    """Which metric a wide file holds, from its file name."""
    name = os.path.basename(path).lower()
    for k in KINDS:
        if k in name: return k
    raise SchemaError(f"Can't tell the data kind of {path}")


def date_columns(headers, first):
    """Start date and count of the consecutive date columns from first."""
    dates = [parse_header_date(h) for h in headers[first:]]
    if not dates or dates[0] is None:
        raise SchemaError(f"Expected a date column at {first} in {headers}")
    for d, d2 in zip(dates, dates[1:]):
        if d2 is None or (d2 - d).days != 1:
            raise SchemaError("Dates must be consecutive.  Did a column get deleted?")
    return dates[0], len(dates)


def read_values(cells):
    """Cumulative values from a wide row.  A blank cell is a clerical gap
    so we carry the previous value across it."""
    values = []
    previous = 0
    for cell in cells:
        cell = cell.strip()
        if cell == '':
            values.append(previous)
            continue
        try: v = int(float(cell))
        except ValueError: raise ParseError(f"Invalid value {cell!r}")
        values.append(v)
        previous = v
    return values


def read_count(s):
    """Counts in the daily files sometimes arrive as floats (half a death),
    so we truncate.  Blank means not reported, which the ratchet ignores."""
    s = (s or '').strip()
    if s == '': return 0
    try: v = int(float(s))
    except ValueError: raise ParseError(f"Invalid count {s!r}")
    if v < 0: raise ParseError(f"Negative count {s!r}")
    return v


def read_updated(s, now):
    s = (s or '').strip()
    if s == '': return as_utc(now)
    t = parse_timestamp(s)
    if t is None: raise ParseError(f"Invalid timestamp {s!r}")
    return t


# --------------------------------------------------
# Global wide time series

def parse_time_series(rows, path, recon, now=None):
    expect_header(rows, TIME_SERIES_HEADER, path)
    kind = kind_for_path(path)
    start_date, n = date_columns(rows[0], len(TIME_SERIES_HEADER))
    batch = TimeSeriesBatch(kind, start_date, [])
    for i, row in enumerate(rows[1:], start=2):
        if len(row) < 2: continue
        country, province = recon.canonicalize(row[1], row[0])
        if recon.is_ignored('time_series', country, province):
            logger.debug("ignoring %s, %s", country, province)
            continue
        try: values = read_values(row[4:4+n])
        except ParseError as e:
            logger.warning("skipping %s row %d (%s, %s): %s", path, i, country, province, e)
            continue
        batch.rows.append(SeriesRow(country, province, values))
    logger.info("read %d %s rows from %s", len(batch.rows), kind, path)
    return batch


def apply_time_series(series_set, batch, recon):
    other = None
    try: other = series_set.find(*OTHER)
    except NotFound: logger.warning("no %s area to collect unknown places", OTHER)
    if other is not None and batch.rows:
        # Other is rebuilt from this file, not added to what was there.
        n = max(len(r.values) for r in batch.rows)
        other.set_range(batch.start_date, batch.kind, [0] * n)
    for r in batch.rows:
        try: s = recon.resolve(series_set, r.country, r.province)
        except NotFound:
            if other is None:
                logger.warning("no area for %s, %s; dropped", r.country, r.province)
                continue
            logger.warning("no area for %s, %s; adding to %s", r.country, r.province, other)
            other.merge_range(batch.start_date, batch.kind, r.values)
            continue
        s.set_range(batch.start_date, batch.kind, r.values)


# --------------------------------------------------
# US wide time series

def _first_date_column(headers):
    for i, h in enumerate(headers):
        if parse_header_date(h) is not None: return i
    raise SchemaError(f"No date columns in {headers}")


def parse_us_time_series(rows, path, recon, now=None):
    source = csv_as_dicts(rows[:1])
    source.require('UID', 'Admin2', 'Province_State', 'Country_Region')
    headers = source.headers()
    kind = kind_for_path(path)
    first = _first_date_column(headers)
    start_date, n = date_columns(headers, first)
    state_col, country_col = headers.index('Province_State'), headers.index('Country_Region')
    batch = TimeSeriesBatch(kind, start_date, [])
    for i, row in enumerate(rows[1:], start=2):
        if len(row) <= country_col: continue
        country, province = recon.canonicalize(row[country_col], row[state_col])
        if recon.is_ignored('time_series_us', country, province): continue
        try: values = read_values(row[first:first+n])
        except ParseError as e:
            logger.warning("skipping %s row %d (%s): %s", path, i, province, e)
            continue
        batch.rows.append(SeriesRow(country, province, values))
    logger.info("read %d US %s rows from %s", len(batch.rows), kind, path)
    return batch


def apply_us_time_series(series_set, batch, recon):
    """Sums county rows into their state's series."""
    reset = set()
    missing = set()
    for r in batch.rows:
        try: s = recon.resolve(series_set, r.country, r.province)
        except NotFound:
            if r.province not in missing:
                logger.warning("no area for %s, %s", r.country, r.province)
                missing.add(r.province)
            continue
        if s.id not in reset:
            s.set_range(batch.start_date, batch.kind, [0] * len(r.values))
            reset.add(s.id)
        s.merge_range(batch.start_date, batch.kind, r.values)


# --------------------------------------------------
# Daily snapshots

def _snapshot(r, country, province, now):
    return Snapshot(country, province,
            updated=read_updated(r.get('Last_Update'), now),
            deaths=read_count(r.get('Deaths')),
            confirmed=read_count(r.get('Confirmed')),
            recovered=read_count(r.get('Recovered')))


def parse_country_cases(rows, path, recon, now=None):
    if now is None: now = utc_now()
    source = csv_as_dicts(rows)
    source.require(*COUNTRY_CASES_COLUMNS)
    snapshots = []
    for r in source:
        country, _ = recon.canonicalize(r['Country_Region'], '')
        if recon.is_ignored('cases_country', country, ''): continue
        try: snapshots.append(_snapshot(r, country, '', now))
        except ParseError as e:
            logger.warning("skipping %s row for %s: %s", path, country, e)
    logger.info("read %d country snapshots from %s", len(snapshots), path)
    return snapshots


def parse_state_cases(rows, path, recon, now=None):
    if now is None: now = utc_now()
    source = csv_as_dicts(rows)
    source.require(*STATE_CASES_COLUMNS)
    snapshots = []
    for r in source:
        country, province = recon.canonicalize(r['Country_Region'], r['Province_State'])
        if recon.is_ignored('cases_state', country, province): continue
        try: snapshots.append(_snapshot(r, country, province, now))
        except ParseError as e:
            logger.warning("skipping %s row for %s, %s: %s", path, country, province, e)
    logger.info("read %d state snapshots from %s", len(snapshots), path)
    return snapshots


def apply_snapshots(series_set, snapshots, recon):
    """Ratchets today's counts.  Returns how many series were updated."""
    updated = 0
    for snap in snapshots:
        try: s = recon.resolve(series_set, snap.country, snap.province)
        except NotFound:
            logger.warning("no area for snapshot %s, %s", snap.country, snap.province)
            continue
        if s.synthetic:
            logger.debug("not updating derived series %s", s)
            continue
        # We don't have tested data from JHU so leave it unchanged.
        s.update_today(snap.updated, snap.deaths, snap.confirmed, snap.recovered, 0)
        logger.debug("update %s: %s", s, s.last_day())
        updated += 1
    return updated
