"""Picks the adapter for a file by looking at its header.

Every feed has the same two steps: parse(payload, name, recon, now),
which needs nothing but the payload, and apply(series_set, parsed, recon),
which is run under the dataset's write lock.
"""
import collections
import json
import logging

from c19series import jhu, storage, uk
from c19series.csv import read_rows
from c19series.errors import SchemaError

logger = logging.getLogger(__name__)

Feed = collections.namedtuple('Feed', ['name', 'matches', 'parse', 'apply', 'today'])
  # today: the feed describes today only, so today must exist before applying it.


def _parse_series(rows, name, recon, now=None):
    return storage.parse_series(rows, name, today=now.date() if now else None)


def _apply_series(series_set, parsed, recon):
    storage.apply_series(series_set, parsed)


def _parse_uk(data, name, recon, now=None):
    return uk.parse_uk_deaths(data, name)


FEEDS = [
    Feed('series', lambda h: h[:2] == ['day', 'area_id'],
        _parse_series, _apply_series, False),
    Feed('time_series', lambda h: h[:1] == ['Province/State'],
        jhu.parse_time_series, jhu.apply_time_series, False),
    Feed('time_series_us', lambda h: 'UID' in h and 'Admin2' in h,
        jhu.parse_us_time_series, jhu.apply_us_time_series, False),
    Feed('cases_country', lambda h: h[:1] == ['Country_Region'],
        jhu.parse_country_cases, jhu.apply_snapshots, True),
    Feed('cases_state', lambda h: 'Province_State' in h and 'Last_Update' in h,
        jhu.parse_state_cases, jhu.apply_snapshots, True),
    Feed('uk', lambda h: False,
        _parse_uk, uk.apply_uk_deaths, False),
]
FEEDS_BY_NAME = {f.name: f for f in FEEDS}


def get(name):
    try: return FEEDS_BY_NAME[name]
    except KeyError: raise SchemaError(f"Unknown feed {name!r}")


def detect(rows, name=''):
    header = [h.strip() for h in rows[0]] if rows else []
    for feed in FEEDS:
        if feed.matches(header): return feed
    raise SchemaError(f"Unrecognised header in {name or 'file'}: {header}")


def read(path):
    """Reads a file into memory and works out its feed.  Returns (feed, payload)."""
    if path.lower().endswith('.json'):
        logger.info("loading file at path: %s", path)
        with open(path, 'r', encoding='utf-8') as f:
            try: return get('uk'), json.load(f)
            except ValueError as e: raise SchemaError(f"Invalid JSON in {path}: {e}")
    rows = read_rows(path)
    return detect(rows, path), rows
