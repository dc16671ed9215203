import argparse
import datetime
import dateutil.parser

EPOCH = datetime.date(2020, 1, 22)
  # Day offset 0.  Every series starts here.

TIMESTAMP_FORMATS = ['%Y-%m-%d %H:%M:%S', '%m/%d/%y %H:%M', '%m/%d/%Y %H:%M']
  # The daily JHU files mix these in one file.  Anything else goes to dateutil.


def utc_now():
    return datetime.datetime.now(datetime.timezone.utc)


def utc_today():
    return utc_now().date()


def as_utc(t):
    """t as an aware UTC datetime.  Naive times are taken to be UTC already."""
    if t.tzinfo is None: return t.replace(tzinfo=datetime.timezone.utc)
    return t.astimezone(datetime.timezone.utc)


def day_offset(date):
    return (date - EPOCH).days


def days_until(date):
    """Number of days from the epoch up to but not including date."""
    return max(day_offset(date), 0)


def parse_date(s, today=None):
    """Parses dates.  Also accepts relative dates."""
    if today is None: today = utc_today()
    if s == "today": return today
    elif s == "yesterday": return today - datetime.timedelta(1)
    elif s == "tomorrow": return today + datetime.timedelta(1)
    try: return dateutil.parser.parse(s).date()
    except (ValueError, OverflowError): return None


def date_argument(s):
    """Use this for as type keyword of the ArgumentParser.add_argument method."""
    d = parse_date(s)
    if d is None: raise argparse.ArgumentTypeError("Unparsable date: " + s)
    return d


def parse_header_date(s):
    """JHU column headers look like 1/22/20.  Anything else is not a date."""
    try: return datetime.datetime.strptime(s.strip(), '%m/%d/%y').date()
    except ValueError: return None


def parse_timestamp(s):
    """Returns an aware UTC datetime, or None if s is not a timestamp."""
    s = s.strip()
    for fmt in TIMESTAMP_FORMATS:
        try: t = datetime.datetime.strptime(s, fmt)
        except ValueError: continue
        return as_utc(t)
    try: return as_utc(dateutil.parser.parse(s))
    except (ValueError, OverflowError): return None
