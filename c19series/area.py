import datetime
import re
import numpy as np

from c19series.date import EPOCH
from c19series.day import Day, KINDS
from c19series.errors import DateMismatch
from c19series.time_series import TimeSeries


def key(s):
    """Case, whitespace and hyphen insensitive form of a name.
    This is also the form used in urls ("united-kingdom")."""
    return re.sub(r'[\s\-]+', '-', (s or '').strip().lower())


class AreaSeries:
    """All the data we know about an area:

    - Identity from the area registry (id, country, province, population,
      coordinates, chart colour, lockdown date).
    - One Day per date from the epoch onwards, holding cumulative counts.
    - Flags saying how the area takes part in the synthetic aggregates.
    """
    def __init__(self, area_id, country, province='', population=0,
            latitude=0.0, longitude=0.0, color='', lockdown_date=None):
        self.id = area_id
        self.country = country
        self.province = province
        self.population = population
        self.latitude = latitude
        self.longitude = longitude
        self.color = color
        self.lockdown_date = lockdown_date

        self.updated_at = None
        self.days = []
        self.previous_day = None
          # Only set on views made by period(); the day just before the window.

        self.synthetic = None
          # 'global' or 'aggregate' for series we derive by summation.
        self.include_in_global = True

    # --------------------------------------------------
    # Identity

    def key(self):
        return (self.country, self.province)

    def is_global(self):
        return self.country == '' and self.province == ''

    def is_province(self):
        return self.country != '' and self.province != ''

    def is_country(self):
        return not self.is_global() and not self.is_province()

    def matches(self, country, province):
        return key(self.country) == key(country) and key(self.province) == key(province)

    def matches_country(self, country):
        return key(self.country) == key(country)

    def title(self):
        if self.is_global(): return "Global"
        if self.is_country(): return self.country
        return f"{self.province} ({self.country})"

    def updated_at_display(self):
        if self.updated_at is None: return ''
        return "Data last updated at " + self.updated_at.strftime("%Y-%m-%d %H:%M %Z")

    def __str__(self):
        return f"{self.title()} ({len(self.days)})"

    def __repr__(self):
        return f"<AreaSeries {self.id} {self.title()} days={len(self.days)}>"

    # --------------------------------------------------
    # Days

    def count(self):
        return len(self.days)

    def start_date(self):
        if self.days: return self.days[0].date
        return EPOCH

    def first_day(self):
        if not self.days: return Day(self.start_date())
        return self.days[0]

    def last_day(self):
        if not self.days: return Day(self.start_date())
        return self.days[-1]

    def penultimate_day(self):
        if len(self.days) < 2: return Day(self.start_date())
        return self.days[-2]

    def append_days(self, count):
        """Adds count empty days dated on from the current last day."""
        if self.days: date = self.days[-1].date + datetime.timedelta(1)
        else: date = EPOCH
        for _ in range(count):
            self.days.append(Day(date))
            date += datetime.timedelta(1)

    def cover(self, length):
        """Right-pad with empty days up to length."""
        if len(self.days) < length: self.append_days(length - len(self.days))

    def reset_days(self):
        """Zero every day, keeping the dates."""
        for day in self.days: day.set_all(0, 0, 0, 0)

    def _position(self, date):
        n = (date - self.start_date()).days
        if n < 0:
            raise DateMismatch(f"{date} is before the start of {self}")
        return n

    def _apply_range(self, start_date, kind, values, op):
        if not values: return
        n = self._position(start_date)
        self.cover(n + len(values))
        if self.days[n].date != start_date:
            raise DateMismatch(f"Start date {start_date} doesn't match {self.days[n].date} on {self}")
        for day, v in zip(self.days[n:], values):
            op(day, kind, v)

    def set_range(self, start_date, kind, values):
        """Replaces kind from start_date onwards with values."""
        self._apply_range(start_date, kind, values, Day.set)

    def merge_range(self, start_date, kind, values):
        """Like set_range, but adds values to what we already have."""
        self._apply_range(start_date, kind, values, Day.merge)

    def set_day(self, n, deaths, confirmed, recovered, tested):
        """Sets all counts on day offset n, growing the series if needed."""
        self.cover(n + 1)
        self.days[n].set_all(deaths, confirmed, recovered, tested)

    def merge_series(self, other):
        """Adds other's days onto ours.  Days past the end of other are left
        alone, since partial coverage is normal for our feeds."""
        self.set_updated(other.updated_at)
        self.cover(len(other.days))
        for day, other_day in zip(self.days, other.days):
            day.merge_day(other_day)

    def set_updated(self, t):
        if t is None: return
        if self.updated_at is None or self.updated_at < t: self.updated_at = t

    def add_today(self):
        """Adds a day carrying forward the last day's counts."""
        if not self.days: return
        last = self.days[-1]
        self.days.append(Day(last.date + datetime.timedelta(1), *last.counts()))

    def update_today(self, observed_at, deaths, confirmed, recovered, tested):
        """Ratchets the last day up to the observed counts.  Nothing here
        ever lowers a count: a 0 from a stale feed leaves the day alone."""
        if not self.days: return
        today = self.days[-1]
        for k, v in zip(KINDS, (deaths, confirmed, recovered, tested)):
            today.ratchet(k, v)
        self.set_updated(observed_at)

    # --------------------------------------------------
    # Views

    def copy(self):
        c = AreaSeries(self.id, self.country, self.province, self.population,
                self.latitude, self.longitude, self.color, self.lockdown_date)
        c.updated_at = self.updated_at
        c.synthetic = self.synthetic
        c.include_in_global = self.include_in_global
        c.days = [d.copy() for d in self.days]
        if self.previous_day is not None: c.previous_day = self.previous_day.copy()
        return c

    def period(self, n):
        """The last n days.  Returns self if that is all of them."""
        if n <= 0 or n >= len(self.days): return self
        i = len(self.days) - n
        view = self.copy()
        view.days = view.days[i:]
        view.previous_day = self.days[i-1].copy()
        return view

    # --------------------------------------------------
    # Values

    def fetch_date(self, date, kind):
        """Cumulative kind on date, 0 outside the series."""
        try: return int(self.values(kind)[date])
        except IndexError: return 0

    def values(self, kind):
        """Cumulative values of kind as a TimeSeries."""
        return TimeSeries(self.start_date(),
                np.array([d.get(kind) for d in self.days], dtype=int))

    def daily(self, kind):
        """Per-day changes in kind as a TimeSeries."""
        previous = None
        if self.previous_day is not None: previous = self.previous_day.get(kind)
        return self.values(kind).diff(previous)

    def daily_deltas(self, kind):
        return [int(x) for x in self.daily(kind)]

    def total(self, kind):
        """Cumulative count at the end of this view minus the count just
        before it starts.  For a full series that is the all-time total."""
        if not self.days: return 0
        before = 0
        if self.previous_day is not None: before = self.previous_day.get(kind)
        return self.days[-1].get(kind) - before

    def total_deaths(self): return self.total('deaths')
    def total_confirmed(self): return self.total('confirmed')
    def total_recovered(self): return self.total('recovered')
    def total_tested(self): return self.total('tested')

    def deaths_today(self):
        return self.last_day().deaths - self.penultimate_day().deaths

    def confirmed_today(self):
        return self.last_day().confirmed - self.penultimate_day().confirmed

    def average(self, kind, days=3):
        """Average daily increase over the last few days."""
        if len(self.days) <= days: return 0
        return (self.days[-1].get(kind) - self.days[-1-days].get(kind)) // days

    def doubling_days(self, kind):
        """How many days back we go before kind was under half its last value."""
        if not self.days: return 0
        half = self.days[-1].get(kind) / 2
        days = 0
        for day in reversed(self.days[:-1]):
            if day.get(kind) < half: break
            days += 1
        return days

    def from_count(self, kind, n):
        """Cumulative values from the first day kind reached n.  The last
        day is left off as today's figures are usually incomplete."""
        for i, day in enumerate(self.days):
            if day.get(kind) >= n:
                return [d.get(kind) for d in self.days[i:-1]]
        return []
