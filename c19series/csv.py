import csv
import logging
import os

from c19series.errors import SchemaError

logger = logging.getLogger(__name__)


class csv_as_dicts:
    """Rows keyed by header.  source is a file object or a list of rows
    already read with read_rows."""
    def __init__(self, source):
        if isinstance(source, list): self._csv_reader = iter(source)
        else: self._csv_reader = csv.reader(source)
        try: self._headers = [h.strip() for h in next(self._csv_reader)]
        except StopIteration: self._headers = []

    def headers(self):
        return self._headers

    def require(self, *names):
        """Raises SchemaError unless every name is a column."""
        missing = [n for n in names if n not in self._headers]
        if missing:
            raise SchemaError(f"Missing columns {missing} in header {self._headers}")

    def __iter__(self):
        for row in self._csv_reader:
            if not any(x.strip() for x in row): continue
            yield {h: x for h,x in zip(self._headers, row)}


def read_rows(path):
    """Reads a whole CSV file into a list of rows (header included)."""
    path = os.path.normpath(path)
    logger.info("loading file at path: %s", path)
    # Note: utf-8-sig gets rid of unicode byte order mark characters.
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return list(csv.reader(f))


def parse_rows(text):
    """Same as read_rows, for CSV that arrived as a string."""
    return list(csv.reader(text.lstrip('\ufeff').splitlines()))


def expect_header(rows, expected, name=''):
    """Exact positional check of the header row."""
    got = [h.strip() for h in rows[0]] if rows else []
    if got[:len(expected)] != list(expected):
        raise SchemaError(f"Invalid header in {name or 'file'}: {got}")
