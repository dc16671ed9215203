"""Adapter for the UK government's nested JSON history.

    {"overview":  [{"areaName": "United Kingdom", "reportingDate": "2020-04-01",
                    "cumulativeDeaths": 2352}, ...],
     "countries": [{"areaName": "Wales", ...}, ...]}

Entries for all areas and dates are mixed together in each list, so we
pick out the ones we want by areaName rather than by position.
"""
import collections
import logging

from c19series.date import parse_date
from c19series.errors import NotFound, ParseError, SchemaError

logger = logging.getLogger(__name__)

UK_AREAS = collections.OrderedDict([
    (('overview', 'United Kingdom'), ('United Kingdom', '')),
    (('countries', 'England'), ('United Kingdom', 'England')),
    (('countries', 'Scotland'), ('United Kingdom', 'Scotland')),
    (('countries', 'Wales'), ('United Kingdom', 'Wales')),
    (('countries', 'Northern Ireland'), ('United Kingdom', 'Northern Ireland')),
])
  # (list, areaName) -> (country, province) in the registry.


def read_entry(entry):
    if not isinstance(entry, dict): raise ParseError(f"Not an object: {entry!r}")
    date = parse_date(str(entry.get('reportingDate') or ''))
    if date is None: raise ParseError(f"Invalid reportingDate in {entry}")
    deaths = entry.get('cumulativeDeaths')
    if deaths is None: deaths = 0
    try: deaths = int(deaths)
    except (TypeError, ValueError): raise ParseError(f"Invalid cumulativeDeaths in {entry}")
    return date, deaths


def parse_uk_deaths(data, name='uk json'):
    """Returns {(country, province): {date: cumulative deaths}}."""
    if not isinstance(data, dict): raise SchemaError(f"Expected an object in {name}")
    deaths = {place: {} for place in UK_AREAS.values()}
    for list_name in ('overview', 'countries'):
        entries = data.get(list_name)
        if not isinstance(entries, list):
            raise SchemaError(f"Missing {list_name} list in {name}")
        for entry in entries:
            place = UK_AREAS.get((list_name, entry.get('areaName') if isinstance(entry, dict) else None))
            if place is None: continue
            try: date, n = read_entry(entry)
            except ParseError as e:
                logger.warning("skipping %s entry: %s", name, e)
                continue
            deaths[place][date] = n
    logger.info("read UK deaths for %d dates from %s",
            sum(len(v) for v in deaths.values()), name)
    return deaths


def apply_uk_deaths(series_set, deaths, recon=None):
    """Overwrites deaths on every day we have a figure for.  This replaces
    history as well as today."""
    for (country, province), by_date in deaths.items():
        try: s = series_set.find(country, province)
        except NotFound:
            logger.warning("no area for %s, %s", country, province)
            continue
        if not s.days or not by_date: continue
        for day in s.days:
            if day.date in by_date: day.deaths = by_date[day.date]
        # The newest day may not be reported yet; don't let it drop.
        if len(s.days) > 1 and s.days[-1].deaths < s.days[-2].deaths:
            s.days[-1].deaths = s.days[-2].deaths
