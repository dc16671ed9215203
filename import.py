#!/usr/bin/env python3
import argparse
import glob
import logging
import os
import sys

from c19series.dataset import Dataset
from c19series.date import date_argument
from c19series.errors import NotFound, SeriesError

# --------------------------------------------------------------------------------

parser = argparse.ArgumentParser(description='Make the series file from Johns Hopkins University time series data')
parser.add_argument("--areas", default=os.path.join('data', 'areas.csv'))
parser.add_argument("--sources", default='sources')
    # Directory holding the time_series*.csv files.
parser.add_argument("--uk_json", default=None)
    # UK government deaths history, applied after the JHU files.
parser.add_argument("--today", default=None, type=date_argument)
    # Extend every series up to this date, carrying the last counts forward.
parser.add_argument("--output", default=os.path.join('output', 'series.csv'))
parser.add_argument("-v", "--verbose", action='store_true')
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s: %(message)s')


# --------------------------------------------------------------------------------
# Global files go first, the US county files then fill in the states.
files = sorted(glob.glob(os.path.join(args.sources, 'time_series*.csv')))
files = ([f for f in files if not f.endswith('_US.csv')] +
         [f for f in files if f.endswith('_US.csv')])
if args.uk_json: files.append(args.uk_json)
if not files: parser.error(f"No time_series*.csv files in {args.sources}")

dataset = Dataset()
try:
    dataset.load(args.areas, *files)
    if args.today: dataset.add_today(args.today)
    dataset.save(args.output)
except SeriesError as e:
    print(f"Import failed: {e}")
    sys.exit(1)

try:
    print("Global:", dataset.fetch_series('', '').last_day())
except NotFound:
    print("No global series in", args.areas)
print("Wrote", args.output)
