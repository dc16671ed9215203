import datetime

import pytest

from c19series import storage
from c19series.area import AreaSeries
from c19series.csv import parse_rows
from c19series.errors import EmptyDataset, SchemaError
from c19series.series_set import SeriesSet

HEADER = "day,area_id,deaths,confirmed,recovered,tested\n"


def two_areas():
    return SeriesSet([AreaSeries(1, 'Italy'), AreaSeries(2, 'Spain')])


def test_parse_series():
    days, values = storage.parse_series(parse_rows(HEADER + "1,1,0,3,0,0\n3,2,1,5,0,10\n"))
    assert days == 3
    assert values == [[1, 1, 0, 3, 0, 0], [3, 2, 1, 5, 0, 10]]


def test_parse_series_skips_bad_rows():
    days, values = storage.parse_series(parse_rows(HEADER + "1,1,0,3,0,0\n0,1,1,1,1,1\n2,x,1,1,1,1\n2,1,1\n"),
            today=datetime.date(2020, 1, 24))
    assert values == [[1, 1, 0, 3, 0, 0]]
    assert days == 2


def test_parse_series_header_only():
    days, values = storage.parse_series(parse_rows(HEADER), today=datetime.date(2020, 1, 25))
    assert (days, values) == (3, [])


def test_parse_series_bad_header():
    with pytest.raises(SchemaError):
        storage.parse_series(parse_rows("day,id,deaths\n1,1,1\n"))


def test_apply_series():
    series_set = two_areas()
    storage.apply_series(series_set, (3, [[2, 1, 4, 5, 6, 7], [1, 99, 1, 1, 1, 1]]))
    italy = series_set.find('Italy')
    assert italy.count() == 3
    assert italy.days[1].counts() == (4, 5, 6, 7)
    assert series_set.find('Spain').count() == 3


def test_series_rows_sparse():
    series_set = two_areas()
    storage.apply_series(series_set, (3, [[3, 2, 1, 0, 0, 0], [2, 1, 4, 5, 6, 7], [3, 1, 4, 5, 6, 7]]))
    assert storage.series_rows(series_set) == [
        [2, 1, 4, 5, 6, 7],
        [3, 1, 4, 5, 6, 7],
        [3, 2, 1, 0, 0, 0],
    ]


def test_series_rows_empty():
    with pytest.raises(EmptyDataset):
        storage.series_rows(SeriesSet())
    with pytest.raises(EmptyDataset):
        storage.series_rows(two_areas())


def test_write_series_replaces(tmp_path):
    path = tmp_path / 'data' / 'series.csv'
    storage.write_series(str(path), [[1, 1, 1, 0, 0, 0]])
    storage.write_series(str(path), [[2, 1, 2, 0, 0, 0]])
    assert path.read_text() == HEADER + "2,1,2,0,0,0\n"
    assert [p.name for p in path.parent.iterdir()] == ['series.csv']
