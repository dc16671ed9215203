import pytest

from c19series.common import format_count


@pytest.mark.parametrize('n, expected', [
    (10, "10"),
    (999, "999"),
    (1000, "1000"),
    (1101, "1101"),
    (10101, "10.1k"),
    (11101, "11.1k"),
    (1000000, "1m"),
    (1100000, "1.1m"),
    (1100499, "1.1m"),
    (22400499, "22.4m"),
])
def test_format_count(n, expected):
    assert format_count(n) == expected


def test_format_count_passes_through_non_numbers():
    assert format_count('') == ''
