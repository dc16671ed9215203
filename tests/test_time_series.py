import datetime

import numpy as np
import pytest

from c19series.time_series import TimeSeries

START = datetime.date(2020, 3, 1)


def test_indexing():
    ts = TimeSeries(START, np.array([1, 3, 6]))
    assert len(ts) == 3
    assert ts[1] == 3
    assert ts[datetime.date(2020, 3, 3)] == 6
    with pytest.raises(IndexError):
        ts[datetime.date(2020, 3, 4)]
    with pytest.raises(IndexError):
        ts[datetime.date(2020, 2, 29)]


def test_diff():
    ts = TimeSeries(START, np.array([1, 3, 6]))
    assert list(ts.diff()) == [0, 2, 3]
    assert list(ts.diff(previous=0)) == [1, 2, 3]
    assert len(TimeSeries(START, np.array([], dtype=int)).diff()) == 0
