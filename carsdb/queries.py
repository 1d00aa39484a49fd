# carsdb/queries.py
"""Read-only queries over the active cars snapshot.

Every public method takes the snapshot reference exactly once, so a refresh
published mid-call cannot mix two datasets into one answer.
"""
from operator import attrgetter
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .models import CAR_FIELDS, CarRecord

# accessor per public field; names outside this table are never read
FIELD_ACCESSORS = {name: attrgetter(name) for name in CAR_FIELDS}
SORT_ALIASES = {"year": "years"}
DIRECTIONS = ("asc", "desc")


def to_partial(car: Optional[CarRecord], selected_fields: Optional[Sequence[str]] = None) -> Optional[Dict[str, Any]]:
    if car is None:
        return None
    if not selected_fields:
        return car.to_dict()
    full = car.to_dict()
    return {name: full[name] for name in selected_fields if name in FIELD_ACCESSORS}


def sort_key(sort_field: str):
    accessor = FIELD_ACCESSORS.get(SORT_ALIASES.get(sort_field, sort_field))
    if accessor is None:
        # unknown field: every record compares equal, order is kept
        return lambda car: 0

    def key(car: CarRecord):
        value = accessor(car)
        return (value is not None, value if value is not None else "")
    return key


def unique_by_id(cars: Iterable[CarRecord]) -> List[CarRecord]:
    seen = set()
    out = []
    for car in cars:
        if car.id not in seen:
            seen.add(car.id)
            out.append(car)
    return out


class QueryEngine:
    """Answers `brands`, `fetch` and `list` against whatever snapshot `source` holds.

    `source` is anything with a `current` attribute returning a `Snapshot`.
    """

    def __init__(self, source):
        self.source = source

    def brands(self) -> List[str]:
        return list(self.source.current.brands)

    def fetch(
        self,
        id: Union[str, Sequence[str]],
        selected_fields: Optional[Sequence[str]] = None,
    ) -> Union[Optional[Dict[str, Any]], List[Optional[Dict[str, Any]]]]:
        snapshot = self.source.current
        if isinstance(id, str):
            return to_partial(snapshot.car(id), selected_fields)
        return [to_partial(snapshot.car(car_id), selected_fields) for car_id in id]

    def list(
        self,
        brand: str,
        selected_fields: Optional[Sequence[str]] = None,
        sort_field: str = "model",
        direction: str = "asc",
    ) -> List[Dict[str, Any]]:
        if direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")
        cars = self.source.current.cars(brand)
        # sorted() is stable for reverse=True as well, so ties keep brand order
        ordered = sorted(cars, key=sort_key(sort_field), reverse=direction == "desc")
        return [to_partial(car, selected_fields) for car in unique_by_id(ordered)]
