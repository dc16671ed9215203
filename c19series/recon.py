import country_converter as coco
import logging
import os

from c19series.csv import csv_as_dicts, read_rows
from c19series.errors import NotFound, SchemaError

logger = logging.getLogger(__name__)

RECON_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'recon')
ROLES = ('global', 'aggregate', 'excluded')


# Canonicalization/reconciliation:
class AreaRecon:
    """Name fixes and aggregation rules, all read from the tables in recon/.

    - data_country_renames.csv: feed country names to registry names.
    - data_province_renames.csv: the same for provinces within a country.
    - data_ignored_places.csv: rows a feed may carry that we know to skip.
    - data_aggregation.csv: which areas are summed, and into what.
    """
    def __init__(self, recon_dir=None):
        logging.getLogger('country_converter').setLevel(logging.ERROR)
            # country_converter issues warnings if you try to convert something that isn't
            # a country, but we use it to test for countries.
        if recon_dir is None: recon_dir = RECON_DIR
        def g(x):
            source = csv_as_dicts(read_rows(os.path.join(recon_dir, x)))
            return list(source)
        self.country_renames = {r["Old Country"]: r["New Country"]
                for r in g('data_country_renames.csv')}
        self.province_renames = {(r["Country"], r["Old Province"]): r["New Province"]
                for r in g('data_province_renames.csv')}
        self.ignored = [(r["Feed"], r["Country"], r["Province"])
                for r in g('data_ignored_places.csv')]
        self.roles = {}
        for r in g('data_aggregation.csv'):
            if r["Role"] not in ROLES:
                raise SchemaError(f"Unknown aggregation role: {r['Role']}")
            self.roles[(r["Country"], r["Province"])] = r["Role"]

        self.country_cache = {}
        self._converter = None

    def sanetize(self, s):
        s = (s or '').strip()
        if s == "None": s = ''
        return s

    def canonicalize(self, country, province):
        country, province = self.sanetize(country), self.sanetize(province)
        country = self.country_renames.get(country, country)
        # Sometimes the country name gets duplicated as the province.
        if province == country: province = ''
        province = self.province_renames.get((country, province), province)
        return country, province

    def is_ignored(self, feed, country, province):
        # US rows with provinces like "Hubolt, CA" are old county level
        # data which JHU zeroed out.
        if country == "US" and ', ' in province: return True
        for f, c, p in self.ignored:
            if f not in ('*', feed): continue
            if c not in ('*', country): continue
            if p not in ('*', province): continue
            return True
        return False

    def canonicalize_country(self, c):
        """Best effort standard short name, or c itself if we can't tell."""
        if c in self.country_cache: return self.country_cache[c]
        if self._converter is None: self._converter = coco.CountryConverter()
        name = self._converter.convert(names=c, src='regex', to='name_short', not_found='??')
        if isinstance(name, list): name = name[0] if len(name) == 1 else '??'
        if name == '??': name = c
        self.country_cache[c] = name
        return name

    def resolve(self, series_set, country, province):
        """Finds the series for a canonicalized place.  Country names our
        tables don't know are tried once more in their standard form."""
        try: return series_set.find(country, province)
        except NotFound:
            if not country: raise
            alt = self.canonicalize_country(country)
            if alt == country: raise
            logger.debug("trying %r as %r", country, alt)
            return series_set.find(alt, province)

    def role(self, series):
        r = self.roles.get((series.country, series.province))
        if r is None and series.province:
            r = self.roles.get((series.country, '*'))
        return r

    def tag(self, series):
        """Sets the aggregation flags on series from the rules table."""
        role = self.role(series)
        series.synthetic = role if role in ('global', 'aggregate') else None
        series.include_in_global = role is None
