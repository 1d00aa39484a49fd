# carsdb/lock.py
"""Leases electing the single process that refreshes the raw dataset file."""
import os
import uuid
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from .utils import logger

LOCK_KEY_PREFIX = "cars:db:lock"


def default_lock_key() -> str:
    # the dataset file is local to the host, so is the election
    return f"{LOCK_KEY_PREFIX}:{uuid.getnode():012x}"


class RedisLease:
    """Time-bounded exclusive lease via `SET key token NX EX ttl`.

    The lease is never renewed or released; it expires after `ttl` seconds and
    the next cycle may elect a different holder.
    """

    def __init__(self, redis: Redis, key: Optional[str] = None, ttl: int = 30):
        self.redis = redis
        self.key = key or default_lock_key()
        self.ttl = ttl
        self.token = f"{os.getpid()}:{uuid.uuid4().hex}"

    def acquire(self) -> bool:
        try:
            return bool(self.redis.set(self.key, self.token, ex=self.ttl, nx=True))
        except RedisError as e:
            logger.warning("Lease %s not acquired, redis error: %s", self.key, e)
            return False


class LocalLease:
    """Lease for single-node deployments: this process always refreshes."""

    key = None

    def acquire(self) -> bool:
        return True


def make_lease(redis_url: Optional[str], key: Optional[str] = None, ttl: int = 30):
    if not redis_url:
        return LocalLease()
    return RedisLease(Redis.from_url(redis_url), key=key, ttl=ttl)
