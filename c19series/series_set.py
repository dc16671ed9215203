import logging

from c19series.area import key
from c19series.date import day_offset, utc_today
from c19series.errors import EmptyDataset, NotFound, SchemaError

logger = logging.getLogger(__name__)


def sort_key(s):
    # Most deaths first.  Areas with equal (or no) deaths go alphabetically.
    return (-s.total_deaths(), s.country, s.province)


class SeriesSet:
    """The collection of all area series.  Nothing here locks: callers
    hold the Dataset's lock around every use."""
    def __init__(self, series=()):
        self._series = []
        self._by_key = {}
        self._by_id = {}
        for s in series: self.add(s)

    def add(self, s):
        if s.id in self._by_id:
            raise SchemaError(f"Duplicate area id {s.id}")
        k = (key(s.country), key(s.province))
        if k in self._by_key:
            raise SchemaError(f"Duplicate area {s.country!r}, {s.province!r}")
        self._series.append(s)
        self._by_key[k] = s
        self._by_id[s.id] = s

    def __iter__(self):
        return iter(self._series)

    def __len__(self):
        return len(self._series)

    def __getitem__(self, i):
        return self._series[i]

    def find(self, country, province=''):
        s = self._by_key.get((key(country), key(province)))
        if s is None: raise NotFound(f"No series for {country!r}, {province!r}")
        return s

    def find_id(self, area_id):
        s = self._by_id.get(area_id)
        if s is None: raise NotFound(f"No series with id {area_id}")
        return s

    def day_count(self):
        return max((s.count() for s in self._series), default=0)

    def pad(self):
        """Right-pad every series to the same length."""
        n = self.day_count()
        for s in self._series: s.cover(n)

    def sort(self):
        self._series.sort(key=sort_key)

    def synthetic(self):
        return [s for s in self._series if s.synthetic]

    def recompute_aggregates(self):
        """Rebuilds every synthetic series from scratch by summing its
        constituents, then re-sorts."""
        self.pad()
        aggregates = self.synthetic()
        for agg in aggregates: agg.reset_days()
        for s in self._series:
            if s.synthetic: continue
            for agg in aggregates:
                if agg.synthetic == 'global':
                    if s.include_in_global: agg.merge_series(s)
                elif s.is_province() and s.matches_country(agg.country):
                    agg.merge_series(s)
        self.sort()

    def add_today(self, today=None):
        """Makes sure the last day of every series is today, carrying the
        previous day's counts forward.  Returns the number of days added."""
        if not self._series:
            raise EmptyDataset("Can't add today to an empty dataset")
        if today is None: today = utc_today()
        self.pad()
        wanted = day_offset(today) + 1
        added = 0
        while self.day_count() < wanted:
            for s in self._series:
                if s.days: s.add_today()
                else: s.append_days(1)
            added += 1
        if added: logger.info("added %d day(s) up to %s", added, today)
        return added
