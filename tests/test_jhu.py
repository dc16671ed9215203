import datetime

import pytest

from c19series import jhu
from c19series.csv import parse_rows
from c19series.errors import ParseError, SchemaError
from c19series.recon import AreaRecon

from conftest import DEATHS, NOON, UTC


@pytest.fixture(scope='module')
def recon():
    return AreaRecon()


def test_kind_for_path():
    assert jhu.kind_for_path('sources/time_series_covid19_deaths_US.csv') == 'deaths'
    assert jhu.kind_for_path('time_series_covid19_confirmed_global.csv') == 'confirmed'
    with pytest.raises(SchemaError):
        jhu.kind_for_path('cases.csv')


def test_date_columns():
    headers = ['Province/State', 'Country/Region', 'Lat', 'Long', '1/22/20', '1/23/20']
    assert jhu.date_columns(headers, 4) == (datetime.date(2020, 1, 22), 2)
    with pytest.raises(SchemaError):
        jhu.date_columns(headers[:4] + ['1/22/20', '1/24/20'], 4)
    with pytest.raises(SchemaError):
        jhu.date_columns(headers, 3)


def test_read_values():
    assert jhu.read_values(['1', ' ', '3', '4.9', '']) == [1, 1, 3, 4, 4]
    with pytest.raises(ParseError):
        jhu.read_values(['1', 'many'])


def test_read_count():
    assert jhu.read_count('') == 0
    assert jhu.read_count(None) == 0
    assert jhu.read_count('12.7') == 12
    with pytest.raises(ParseError):
        jhu.read_count('-3')
    with pytest.raises(ParseError):
        jhu.read_count('n/a')


def test_read_updated():
    assert jhu.read_updated('2020-04-01 23:05:30', NOON) == datetime.datetime(2020, 4, 1, 23, 5, 30, tzinfo=UTC)
    assert jhu.read_updated('4/1/2020 23:05', NOON) == datetime.datetime(2020, 4, 1, 23, 5, tzinfo=UTC)
    assert jhu.read_updated('', NOON) == NOON
    assert jhu.read_updated('4/1/20 23:05', NOON) == datetime.datetime(2020, 4, 1, 23, 5, tzinfo=UTC)
    assert jhu.read_updated('', datetime.datetime(2020, 1, 24, 12)) == NOON
    with pytest.raises(ParseError):
        jhu.read_updated('soon', NOON)


def test_parse_time_series(recon):
    batch = jhu.parse_time_series(parse_rows(DEATHS), 'time_series_covid19_deaths_global.csv', recon)
    assert batch.kind == 'deaths'
    assert batch.start_date == datetime.date(2020, 1, 22)
    places = [(r.country, r.province) for r in batch.rows]
    assert ('South Korea', '') in places
    assert ('Westeros', '') in places
    assert ('Diamond Princess', '') not in places
    assert ('Canada', 'Recovered') not in places


def test_parse_time_series_bad_header(recon):
    rows = parse_rows("Province,Country,Lat,Long,1/22/20\n,Italy,0,0,1\n")
    with pytest.raises(SchemaError):
        jhu.parse_time_series(rows, 'time_series_covid19_deaths_global.csv', recon)


def test_parse_time_series_skips_bad_rows(recon):
    rows = parse_rows("Province/State,Country/Region,Lat,Long,1/22/20\n,Italy,0,0,x\n,Spain,0,0,2\n")
    batch = jhu.parse_time_series(rows, 'time_series_covid19_deaths_global.csv', recon)
    assert batch.rows == [jhu.SeriesRow('Spain', '', [2])]


def test_parse_us_time_series_needs_columns(recon):
    rows = parse_rows("UID,Province_State,Country_Region,1/22/20\n1,Texas,US,4\n")
    with pytest.raises(SchemaError):
        jhu.parse_us_time_series(rows, 'time_series_covid19_deaths_US.csv', recon)


def test_parse_country_cases(recon):
    rows = parse_rows("""\
Country_Region,Last_Update,Lat,Long_,Confirmed,Deaths,Recovered,Active
United Kingdom,2020-04-01 10:00:00,55,-3,100,10,0,90
Italy,4/1/2020 9:15,41.9,12.6,1000,99.5,,
Spain,soon,40,-3,1,1,1,1
""")
    snapshots = jhu.parse_country_cases(rows, 'cases_country.csv', recon, now=NOON)
    assert snapshots == [jhu.Snapshot('Italy', '', datetime.datetime(2020, 4, 1, 9, 15, tzinfo=UTC), 99, 1000, 0)]


def test_parse_state_cases_missing_column(recon):
    rows = parse_rows("Province_State,Country_Region,Last_Update,Confirmed,Deaths\n")
    with pytest.raises(SchemaError):
        jhu.parse_state_cases(rows, 'cases_state.csv', recon, now=NOON)
