from c19series.errors import DateMismatch

KINDS = ('deaths', 'confirmed', 'recovered', 'tested')
  # The metrics we track.  Order matters: it is the column order on disk.


class Day:
    """One date's cumulative counts for one area."""
    def __init__(self, date, deaths=0, confirmed=0, recovered=0, tested=0):
        self.date = date
        self.deaths = deaths
        self.confirmed = confirmed
        self.recovered = recovered
        self.tested = tested

    def get(self, kind):
        if kind not in KINDS: raise KeyError(kind)
        return getattr(self, kind)

    def set(self, kind, value):
        if kind not in KINDS: raise KeyError(kind)
        setattr(self, kind, value)

    def set_all(self, deaths, confirmed, recovered, tested):
        self.deaths = deaths
        self.confirmed = confirmed
        self.recovered = recovered
        self.tested = tested

    def merge(self, kind, value):
        self.set(kind, self.get(kind) + value)

    def merge_day(self, other):
        if self.date != other.date:
            raise DateMismatch(f"Can't merge {other} into {self}")
        for k in KINDS: self.merge(k, other.get(k))

    def ratchet(self, kind, value):
        """Raise kind to value, never lower it."""
        if value > self.get(kind): self.set(kind, value)

    def counts(self):
        return tuple(self.get(k) for k in KINDS)

    def is_empty(self):
        return not any(self.counts())

    def copy(self):
        return Day(self.date, *self.counts())

    def __eq__(self, other):
        if not isinstance(other, Day): return NotImplemented
        return self.date == other.date and self.counts() == other.counts()

    def __repr__(self):
        return "%s %d-%d-%d-%d" % ((self.date.isoformat(),) + self.counts())
