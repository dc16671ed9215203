import collections

from c19series.area import key
from c19series.jhu import OTHER

Option = collections.namedtuple('Option', ['name', 'value'])

PERIODS = [(-1, "All Time"), (112, "112 Days"), (56, "56 Days"), (28, "28 Days"),
        (14, "14 Days"), (7, "7 Days"), (3, "3 Days")]


def period_options():
    return [Option(name, str(days)) for days, name in PERIODS]


def _label(name, deaths):
    if deaths > 0: return f"{name} ({deaths} Deaths)"
    return name


def country_options(series):
    """Global first, then every country-level series in dataset order.
    The catch-all for unplaced rows is not a country so it is left out."""
    options = [Option("Global", '')]
    for s in series:
        if s.is_country() and not s.matches(*OTHER):
            options.append(Option(_label(s.country, s.total_deaths()), key(s.country)))
    return options


def province_options(series, country):
    options = [Option("All Areas", '')]
    for s in series:
        if s.is_province() and s.matches_country(country):
            options.append(Option(_label(s.province, s.total_deaths()), key(s.province)))
    return options
