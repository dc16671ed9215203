"""The persisted series file.

    day,area_id,deaths,confirmed,recovered,tested

day is 1-based from the epoch.  Rows where all four counts are zero are
left out, so the file grows with reported activity rather than with
areas times days.  Rows are written day by day so new days land at the
end of the file.
"""
import csv
import logging
import os
import tempfile

from c19series.common import maybe_makedir
from c19series.csv import expect_header
from c19series.date import days_until, utc_today
from c19series.errors import EmptyDataset, NotFound, ParseError

logger = logging.getLogger(__name__)

HEADER = ['day', 'area_id', 'deaths', 'confirmed', 'recovered', 'tested']


def read_series_row(row):
    if len(row) != len(HEADER): raise ParseError(f"Wrong length for series row {row}")
    try: values = [int(x) for x in row]
    except ValueError: raise ParseError(f"Invalid number in series row {row}")
    if values[0] < 1: raise ParseError(f"Invalid day in series row {row}")
    return values


def parse_series(rows, name='series', today=None):
    """Returns (day count, [(day, area_id, deaths, confirmed, recovered, tested)])."""
    expect_header(rows, HEADER, name)
    try: days = int(rows[-1][0])
    except (ValueError, IndexError):
        # Fall back to days up to but not including today.
        if today is None: today = utc_today()
        days = days_until(today)
    values = []
    for row in rows[1:]:
        if not any(x.strip() for x in row): continue
        try: values.append(read_series_row(row))
        except ParseError as e:
            logger.warning("skipping series row: %s", e)
    if values: days = max(days, max(v[0] for v in values))
    logger.info("read %d series rows, %d days from %s", len(values), days, name)
    return days, values


def apply_series(series_set, parsed):
    """Zero-fills every series to the file's length, then fills in its rows."""
    days, values = parsed
    for s in series_set: s.cover(days)
    for day, area_id, deaths, confirmed, recovered, tested in values:
        try: s = series_set.find_id(area_id)
        except NotFound:
            logger.warning("series row for unknown area id %d", area_id)
            continue
        s.set_day(day - 1, deaths, confirmed, recovered, tested)


def series_rows(series_set):
    """The sparse rows for series_set, ordered by day then area id."""
    days = series_set.day_count()
    if len(series_set) == 0 or days == 0:
        raise EmptyDataset("Refusing to save an empty dataset")
    by_id = sorted(series_set, key=lambda s: s.id)
    rows = []
    for i in range(days):
        for s in by_id:
            if i >= len(s.days): continue
            d = s.days[i]
            if d.is_empty(): continue
            rows.append([i+1, s.id] + list(d.counts()))
    return rows


def write_series(path, rows):
    """Writes via a temporary file so readers never see half a file."""
    path = os.path.abspath(path)
    maybe_makedir(os.path.dirname(path))
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(path), suffix='.csv')
    try:
        with os.fdopen(fd, 'w', newline='') as f:
            out = csv.writer(f, lineterminator='\n')
            out.writerow(HEADER)
            out.writerows(rows)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    logger.info("saved %d series rows to %s", len(rows), path)
