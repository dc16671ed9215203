"""Reconciliation and storage of per-area cumulative case counts."""
from c19series.errors import (
    SeriesError, SchemaError, DateMismatch, NotFound, ParseError, EmptyDataset)
from c19series.day import Day, KINDS
from c19series.area import AreaSeries
from c19series.dataset import Dataset

__version__ = '0.1.0'
