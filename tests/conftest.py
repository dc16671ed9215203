import datetime

import pytest

from c19series.csv import parse_rows
from c19series.dataset import Dataset

UTC = datetime.timezone.utc

AREAS = """\
country,province,area_id,latitude,longitude,population,lockdown_date,colour
,,0,0,0,7800000000,,
Other,,1,0,0,0,,
United Kingdom,,2,55.3,-3.4,67000000,2020-03-23,#1f77b4
United Kingdom,Wales,3,52.1,-3.8,3100000,,
United Kingdom,England,4,52.3,-1.2,56000000,,
China,,5,35.9,104.2,1400000000,,
China,Hubei,6,30.9,112.2,58000000,2020-01-23,
China,Beijing,7,40.1,116.4,21000000,,
US,,8,37.1,-95.7,328000000,,
US,California,9,36.8,-119.4,39500000,,
US,New York,10,43.0,-75.0,19400000,,
Italy,,11,41.9,12.6,60000000,2020-03-09,
South Korea,,12,35.9,127.8,51000000,,
"""

DEATHS = """\
Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,United Kingdom,55.3,-3.4,0,1,3
Wales,United Kingdom,52.1,-3.8,0,1,1
England,United Kingdom,52.3,-1.2,0,0,2
Hubei,China,30.9,112.2,10,20,30
Beijing,China,40.1,116.4,1,2,3
,US,37.1,-95.7,0,1,2
,Italy,41.9,12.6,0,0,5
,"Korea, South",35.9,127.8,0,0,1
,Westeros,0,0,1,1,1
,Diamond Princess,0,0,5,5,5
Recovered,Canada,0,0,9,9,9
"""

CONFIRMED = """\
Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,United Kingdom,55.3,-3.4,2,10,20
Hubei,China,30.9,112.2,400,500,
,Italy,41.9,12.6,0,3.0,9
"""

LAST_DAY = datetime.date(2020, 1, 24)
NOON = datetime.datetime(2020, 1, 24, 12, 0, tzinfo=UTC)
  # Midday of the last day in the files above.


def write(path, text):
    path.write_text(text, encoding='utf-8')
    return str(path)


@pytest.fixture
def area_rows():
    return parse_rows(AREAS)


@pytest.fixture
def data_dir(tmp_path):
    write(tmp_path / 'areas.csv', AREAS)
    write(tmp_path / 'time_series_covid19_deaths_global.csv', DEATHS)
    write(tmp_path / 'time_series_covid19_confirmed_global.csv', CONFIRMED)
    return tmp_path


@pytest.fixture
def dataset(data_dir):
    d = Dataset()
    d.load(str(data_dir / 'areas.csv'),
            str(data_dir / 'time_series_covid19_deaths_global.csv'),
            str(data_dir / 'time_series_covid19_confirmed_global.csv'),
            now=NOON)
    return d
