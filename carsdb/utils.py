# carsdb/utils.py
"""Shared utilities: logging, retry and call profiling decorators."""
import os
import logging
import time
from functools import wraps
from dotenv import load_dotenv

load_dotenv()

def get_logger(name="carsdb"):
    """Logger with the service-wide format; level comes from LOG_LEVEL."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, level, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("carsdb")

def retry(exceptions, tries=3, delay=1, backoff=2, logger=logger):
    """Retry on `exceptions`, sleeping `delay` sec and growing it by `backoff`.

    The wrapped function exposes `tries` and `total_delay` (the summed sleeps
    of a fully failing call) so callers can bound its worst-case run time.
    """
    def deco_retry(f):
        @wraps(f)
        def f_retry(*args, **kwargs):
            mtries, mdelay = tries, delay
            while mtries > 1:
                try:
                    return f(*args, **kwargs)
                except exceptions as e:
                    logger.warning("%s failed: %s, retrying in %s sec", f.__name__, e, mdelay)
                    time.sleep(mdelay)
                    mtries -= 1
                    mdelay *= backoff
            return f(*args, **kwargs)
        f_retry.tries = tries
        f_retry.total_delay = sum(delay * backoff ** i for i in range(tries - 1))
        return f_retry
    return deco_retry

def profile(f=None, *, logger=logger, level=logging.DEBUG):
    """Log how long each call of the wrapped function takes.

    Usable bare (``@profile``) or with options (``@profile(level=logging.INFO)``).
    """
    def deco_profile(fn):
        @wraps(fn)
        def f_profile(*args, **kwargs):
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed = (time.perf_counter() - started) * 1000
                logger.log(level, "%s executed in %.3f ms", fn.__qualname__, elapsed)
        return f_profile
    if f is not None:
        return deco_profile(f)
    return deco_profile
