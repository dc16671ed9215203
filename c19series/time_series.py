import datetime
import numpy as np


class TimeSeries:
    """One metric of one area as an array of values and a start date.
    Index it by position or by date."""
    def __init__(self, start_date, array):
        self._start_date = start_date
        self._array = array

    def date_to_position(self, date):
        n = (date - self._start_date).days
        if n < 0 or n >= len(self._array): return None
        return n

    def index_to_position(self, idx):
        if isinstance(idx, datetime.date):
            return self.date_to_position(idx)
        return idx

    def __len__(self):
        return len(self._array)

    def __getitem__(self, idx):
        n = self.index_to_position(idx)
        if n is None: raise IndexError(idx)
        return self._array[n]

    def __iter__(self):
        return iter(self._array)

    def diff(self, previous=None):
        """Per-day changes.  The first element is measured against previous,
        or is 0 when previous is unknown."""
        a = np.asarray(self._array, dtype=int)
        if len(a) == 0: return TimeSeries(self._start_date, a)
        first = a[0] if previous is None else previous
        return TimeSeries(self._start_date, np.diff(a, prepend=first))
