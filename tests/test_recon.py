import pytest

from c19series.area import AreaSeries
from c19series.errors import NotFound
from c19series.recon import AreaRecon
from c19series.series_set import SeriesSet


@pytest.fixture(scope='module')
def recon():
    return AreaRecon()


def test_canonicalize(recon):
    assert recon.canonicalize('Korea, South', '') == ('South Korea', '')
    assert recon.canonicalize(' Taiwan* ', None) == ('Taiwan', '')
    assert recon.canonicalize('France', 'France') == ('France', '')
    assert recon.canonicalize('UK', 'Falkland Islands (Malvinas)') == ('United Kingdom', 'Falkland Islands')
    assert recon.canonicalize('Italy', 'None') == ('Italy', '')


def test_is_ignored(recon):
    assert recon.is_ignored('time_series', 'Diamond Princess', '')
    assert recon.is_ignored('time_series', 'Canada', 'Recovered')
    assert recon.is_ignored('time_series_us', 'US', 'Humboldt, CA')
    assert recon.is_ignored('cases_country', 'United Kingdom', '')
    assert not recon.is_ignored('time_series', 'United Kingdom', '')
    assert not recon.is_ignored('time_series', 'Canada', 'Ontario')


def test_tag(recon):
    world, china, california, us, wales = (AreaSeries(0, '', ''), AreaSeries(1, 'China'),
            AreaSeries(2, 'US', 'California'), AreaSeries(3, 'US'), AreaSeries(4, 'United Kingdom', 'Wales'))
    for s in (world, china, california, us, wales): recon.tag(s)
    assert world.synthetic == 'global'
    assert china.synthetic == 'aggregate'
    assert not china.include_in_global
    assert california.synthetic is None
    assert not california.include_in_global
    assert us.include_in_global
    assert not wales.include_in_global


def test_resolve(recon):
    series_set = SeriesSet([AreaSeries(1, 'Italy')])
    assert recon.resolve(series_set, 'italy', '').id == 1
    with pytest.raises(NotFound):
        recon.resolve(series_set, 'Westeros', '')
    with pytest.raises(NotFound):
        recon.resolve(series_set, '', '')
