# carsdb/scheduler.py
"""Periodic rebuild of the cars snapshot.

Each cycle walks IDLE -> LOCKING -> (UPDATING) -> LOADING -> INDEXING ->
PUBLISHED -> IDLE. Only the lease holder updates the raw file; every process
rebuilds its own snapshot from whatever file exists locally.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from .config import Settings
from .db import SnapshotStore
from .fetch import max_fetch_duration, update_dataset
from .lock import make_lease
from .models import CarRecord, Snapshot
from .services import build_snapshot, load_records
from .utils import logger


class RefreshState(str, Enum):
    IDLE = "idle"
    LOCKING = "locking"
    UPDATING = "updating"
    LOADING = "loading"
    INDEXING = "indexing"
    PUBLISHED = "published"


@dataclass
class CycleResult:
    lease_acquired: bool = False
    updated: bool = False
    published: bool = False
    error: Optional[str] = None


class RefreshCoordinator:
    """Owns the load -> dedup -> index pipeline and publishes its snapshots.

    `lease` needs an `acquire() -> bool`; `fetcher(path)` must leave a complete
    dataset file at `path` or raise. Both are swappable for tests.
    """

    def __init__(
        self,
        store: SnapshotStore,
        data_path: str,
        lease,
        fetcher: Callable[[str], object],
        loader: Callable[[str], List[CarRecord]] = load_records,
        indexer: Callable[..., Snapshot] = build_snapshot,
    ):
        self.store = store
        self.data_path = data_path
        self.lease = lease
        self.fetcher = fetcher
        self.loader = loader
        self.indexer = indexer
        self.state = RefreshState.IDLE
        self.cycles = 0

    def should_update(self) -> bool:
        # the first cycle reuses an existing file; later ticks always refresh it
        return self.cycles > 0 or not os.path.exists(self.data_path)

    def run_cycle(self) -> CycleResult:
        result = CycleResult()
        try:
            self.state = RefreshState.LOCKING
            result.lease_acquired = self.lease.acquire()
            if result.lease_acquired and self.should_update():
                self.state = RefreshState.UPDATING
                result.updated = self._update()

            self.state = RefreshState.LOADING
            records = self.loader(self.data_path)
            self.state = RefreshState.INDEXING
            snapshot = self.indexer(records, source=self.data_path)
            self.store.publish(snapshot)
            self.state = RefreshState.PUBLISHED
            result.published = True
            logger.info(
                "Published cars snapshot: %d records, %d brands (lease=%s, updated=%s)",
                len(snapshot), len(snapshot.brands), result.lease_acquired, result.updated,
            )
        except Exception as e:
            result.error = str(e)
            logger.exception("Cars snapshot refresh failed in state %s, keeping previous snapshot", self.state.value)
        finally:
            self.cycles += 1
            self.state = RefreshState.IDLE
        return result

    def _update(self) -> bool:
        try:
            self.fetcher(self.data_path)
            return True
        except Exception as e:
            logger.error("Cars dataset update failed, using local copy: %s", e)
            return False


def build_coordinator(settings: Settings, store: SnapshotStore) -> RefreshCoordinator:
    worst_fetch = max_fetch_duration(settings.fetch_timeout)
    if settings.lock_ttl <= worst_fetch:
        raise ValueError(
            f"CARS_LOCK_TTL={settings.lock_ttl} must exceed the worst-case dataset fetch of {worst_fetch} sec"
        )
    lease = make_lease(settings.redis_url, key=settings.lock_key, ttl=settings.lock_ttl)

    def fetcher(path):
        return update_dataset(settings.data_url, path, timeout=settings.fetch_timeout)

    return RefreshCoordinator(store, settings.data_path, lease, fetcher)


scheduler = BackgroundScheduler()


def start(coordinator: RefreshCoordinator, interval: int):
    scheduler.add_job(
        coordinator.run_cycle,
        "interval",
        seconds=interval,
        id="cars-db-refresh",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduler started, refreshing cars every %s sec", interval)
    return scheduler


def stop():
    if scheduler.running:
        scheduler.shutdown(wait=False)
