import datetime
import logging
import os

from c19series import areas, feeds, options, storage
from c19series.area import AreaSeries
from c19series.csv import read_rows
from c19series.date import as_utc, utc_now
from c19series.errors import EmptyDataset
from c19series.recon import AreaRecon
from c19series.rwlock import RWLock
from c19series.series_set import SeriesSet

logger = logging.getLogger(__name__)

AREAS_FILE = 'areas.csv'
SERIES_FILE = 'series.csv'


def _fresh(s):
    """s's identity with no days."""
    return AreaSeries(s.id, s.country, s.province, s.population,
            s.latitude, s.longitude, s.color, s.lockdown_date)


class Dataset:
    """The shared, in-memory set of area series.

    All mutation happens under the write half of one reader/writer lock and
    all queries under the read half.  Files are read and parsed before the
    lock is taken, so a malformed file raises before anything changes, and
    queries hand back copies so that callers never see a series mid-update.
    """
    def __init__(self, recon=None):
        self.recon = recon if recon is not None else AreaRecon()
        self._lock = RWLock()
        self._series = SeriesSet()

    def __len__(self):
        with self._lock.read():
            return len(self._series)

    # --------------------------------------------------
    # Loading

    def _build(self, area_list, parsed, now):
        """A new SeriesSet from registry rows and parsed feeds.  Caller holds the lock."""
        series_set = SeriesSet(area_list)
        for s in series_set: self.recon.tag(s)
        for feed, data, name in parsed:
            if feed.today: series_set.add_today(now.date())
            feed.apply(series_set, data, self.recon)
        series_set.recompute_aggregates()
        return series_set

    def load(self, area_path, *series_paths, now=None):
        """Replaces the dataset with the registry at area_path plus each
        series file in turn.  Order matters: historical files first."""
        start = datetime.datetime.now()
        now = utc_now() if now is None else as_utc(now)
        area_list = areas.parse_areas(read_rows(area_path), area_path)
        parsed = []
        for path in series_paths:
            feed, payload = feeds.read(path)
            parsed.append((feed, feed.parse(payload, path, self.recon, now), path))
        with self._lock.write():
            self._series = self._build(area_list, parsed, now)
        logger.info("loaded %d areas from %d files in %s", len(area_list),
                len(series_paths), datetime.datetime.now() - start)

    def load_dir(self, data_path, now=None):
        self.load(os.path.join(data_path, AREAS_FILE),
                os.path.join(data_path, SERIES_FILE), now=now)

    def reload(self, path, now=None):
        """Rebuilds every series from a saved series file, keeping the areas."""
        now = utc_now() if now is None else as_utc(now)
        feed, payload = feeds.read(path)
        parsed = [(feed, feed.parse(payload, path, self.recon, now), path)]
        with self._lock.write():
            area_list = [_fresh(s) for s in self._series]
            self._series = self._build(area_list, parsed, now)

    def update(self, feed_name, payload, name='', now=None):
        """Applies one batch from a feed (CSV rows, or decoded JSON for 'uk')."""
        feed = feeds.get(feed_name)
        now = utc_now() if now is None else as_utc(now)
        parsed = feed.parse(payload, name or feed_name, self.recon, now)
        with self._lock.write():
            if not len(self._series):
                raise EmptyDataset(f"Can't apply {feed_name} to an empty dataset")
            if feed.today: self._series.add_today(now.date())
            feed.apply(self._series, parsed, self.recon)
            self._series.recompute_aggregates()

    def update_country_cases(self, rows, now=None):
        self.update('cases_country', rows, now=now)

    def update_state_cases(self, rows, now=None):
        self.update('cases_state', rows, now=now)

    def update_time_series(self, rows, path):
        self.update('time_series', rows, name=path)

    def update_uk(self, data):
        self.update('uk', data)

    # --------------------------------------------------
    # Maintenance

    def recompute_aggregates(self):
        with self._lock.write():
            self._series.recompute_aggregates()

    def add_today(self, today=None):
        with self._lock.write():
            return self._series.add_today(today)

    def save(self, path):
        """Writes the sparse series file.  Raises EmptyDataset rather than
        writing a file with nothing in it."""
        with self._lock.write():
            storage.write_series(path, storage.series_rows(self._series))

    # --------------------------------------------------
    # Queries

    def fetch_series(self, country, province=''):
        with self._lock.read():
            return self._series.find(country, province).copy()

    def fetch_by_id(self, area_id):
        with self._lock.read():
            return self._series.find_id(area_id).copy()

    def fetch_date(self, country, province, kind, date):
        with self._lock.read():
            return self._series.find(country, province).fetch_date(date, kind)

    def all_series(self):
        with self._lock.read():
            return [s.copy() for s in self._series]

    def top_series(self, country, n):
        """The provinces of country with the most deaths."""
        with self._lock.read():
            found = [s for s in self._series
                    if s.is_province() and s.matches_country(country)]
            return [s.copy() for s in found[:n]]

    def top_countries(self, n, exclude=()):
        with self._lock.read():
            found = [s for s in self._series
                    if s.is_country() and s.country not in exclude]
            return [s.copy() for s in found[:n]]

    def country_options(self):
        with self._lock.read():
            return options.country_options(self._series)

    def province_options(self, country):
        with self._lock.read():
            return options.province_options(self._series, country)

    def period_options(self):
        return options.period_options()
