# carsdb/services.py
"""Ingestion pipeline: parsed rows -> merged car records -> indexed snapshot."""
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional

from .models import CarRecord, IdentityKey, Snapshot, car_id
from .parsing import ParsedRow, parse_header, parse_row
from .utils import logger


class DatasetError(Exception):
    """Raised when the source file cannot be read."""


class _Draft:
    __slots__ = ("id", "make", "model", "type", "years")

    def __init__(self, row: ParsedRow):
        self.id = car_id(row.make, row.model, row.type)
        self.make = row.make
        self.model = row.model
        self.type = row.type
        self.years = {row.year}

    def freeze(self) -> CarRecord:
        return CarRecord(self.id, self.make, self.model, self.type, tuple(sorted(self.years)))


class Deduplicator:
    """Folds parsed rows into one record per (make, model, class bucket).

    Records keep first-seen order. A repeated identity key only merges its year
    into the existing record; the identifier is assigned once, on creation.
    """

    def __init__(self):
        self._drafts: Dict[IdentityKey, _Draft] = {}

    def add(self, row: Optional[ParsedRow]) -> None:
        if row is None:
            return
        key = (row.make, row.model, row.type)
        draft = self._drafts.get(key)
        if draft is None:
            self._drafts[key] = _Draft(row)
        else:
            draft.years.add(row.year)

    def records(self) -> List[CarRecord]:
        return [d.freeze() for d in self._drafts.values()]


def merge_rows(rows: Iterable[Optional[ParsedRow]]) -> List[CarRecord]:
    dedup = Deduplicator()
    for row in rows:
        dedup.add(row)
    return dedup.records()


def parse_lines(lines: Iterable[str]) -> Iterable[Optional[ParsedRow]]:
    fields = None
    for line in lines:
        if fields is None:
            fields = parse_header(line)
            if not fields.complete:
                raise DatasetError(f"dataset header lacks consumed columns: {line.strip()[:80]!r}")
            continue
        yield parse_row(fields, line)


def load_records(path: str) -> List[CarRecord]:
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as fh:
            records = merge_rows(parse_lines(fh))
    except OSError as e:
        raise DatasetError(f"cannot read cars dataset {path}: {e}") from e
    logger.info("Loaded %d car records from %s", len(records), path)
    return records


def build_snapshot(records: Iterable[CarRecord], source: Optional[str] = None) -> Snapshot:
    records = tuple(records)
    by_id: Dict[str, CarRecord] = {}
    groups: Dict[str, List[CarRecord]] = {}
    for car in records:
        by_id[car.id] = car
        groups.setdefault(car.make, []).append(car)
    return Snapshot(
        records=records,
        by_id=MappingProxyType(by_id),
        by_brand=MappingProxyType({brand: tuple(cars) for brand, cars in groups.items()}),
        brands=tuple(sorted(groups)),
        loaded_at=datetime.now(timezone.utc),
        source=source,
    )


def load_snapshot(path: str) -> Snapshot:
    return build_snapshot(load_records(path), source=path)
