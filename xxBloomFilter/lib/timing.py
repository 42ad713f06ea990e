from functools import wraps
from time import perf_counter
import sys


def timing(f):
    """Writes the wall time of each call of f to stderr."""
    @wraps(f)
    def wrap(*args, **kw):
        ts = perf_counter()
        try:
            return f(*args, **kw)
        finally:
            te = perf_counter()
            sys.stderr.write('func:%r took: %2.4f sec\n' % (f.__name__, te - ts))
    return wrap
