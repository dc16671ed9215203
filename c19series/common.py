import numbers
import os

# --------------------------------------------------
# Generic helpers:

def format_count(n):
    """Short display form of a count: 999, 10.1k, 1.1m, 2.5b."""
    if not isinstance(n, numbers.Number): return n
    if n < 10000: return "%d" % n
    if n < 1000000: return "%.1fk" % (n / 1000)
    if n < 1000000000: return "%.3gm" % (n / 1000000)
    return "%.2gb" % (n / 1000000000)


def maybe_makedir(dirname):
    if dirname and not os.path.exists(dirname): os.makedirs(dirname)
