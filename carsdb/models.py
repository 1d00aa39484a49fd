# carsdb/models.py
"""In-memory data model: car records and the immutable snapshot built from them.

A `Snapshot` is produced wholesale by one ingestion pass and never edited
afterwards; the next pass replaces it.
"""
import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# public field names, in output order
CAR_FIELDS = ("id", "make", "model", "type", "years")


class ClassBucket(str, Enum):
    MINI = "mini"
    MIDSIZE = "midsize"
    LARGE = "large"


IdentityKey = Tuple[str, str, Optional[str]]


def car_id(make: str, model: str, bucket: Optional[str]) -> str:
    """Deterministic 128-bit hex digest of the identity key."""
    raw = ",".join([make, model, bucket or ""])
    return hashlib.blake2b(raw.encode("utf-8"), digest_size=16).hexdigest()


@dataclass(frozen=True)
class CarRecord:
    id: str
    make: str
    model: str
    type: Optional[str]
    years: Tuple[int, ...] = ()

    def to_dict(self):
        return {
            "id": self.id,
            "make": self.make,
            "model": self.model,
            "type": self.type,
            "years": list(self.years),
        }


@dataclass(frozen=True)
class Snapshot:
    records: Tuple[CarRecord, ...] = ()
    by_id: Mapping[str, CarRecord] = field(default_factory=lambda: MappingProxyType({}))
    by_brand: Mapping[str, Tuple[CarRecord, ...]] = field(default_factory=lambda: MappingProxyType({}))
    brands: Tuple[str, ...] = ()
    loaded_at: Optional[datetime] = None
    source: Optional[str] = None

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    def car(self, id: str) -> Optional[CarRecord]:
        return self.by_id.get(id)

    def cars(self, brand: str) -> Tuple[CarRecord, ...]:
        return self.by_brand.get(brand, ())

    def __len__(self) -> int:
        return len(self.records)
