# carsdb/parsing.py
"""Row parsing for the vehicles CSV.

The file is a plain comma separated export with a header row. Only four
columns are consumed; quoting is not supported.
"""
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional

from .models import ClassBucket

MINI, MIDSIZE, LARGE = ClassBucket.MINI.value, ClassBucket.MIDSIZE.value, ClassBucket.LARGE.value

# raw VClass value -> class bucket; anything missing here is an unknown bucket
CLASS_BUCKETS: Dict[str, str] = {
    "Two Seaters": MINI,
    "Subcompact Cars": MINI,
    "Minicompact Cars": MINI,
    "Compact Cars": MIDSIZE,
    "Midsize Cars": MIDSIZE,
    "Large Cars": LARGE,
    "Vans": LARGE,
    "Vans Passenger": LARGE,
    "Small Station Wagons": LARGE,
    "Midsize Station Wagons": LARGE,
    "Midsize-Large Station Wagons": LARGE,
    "Small Pickup Trucks": LARGE,
    "Small Pickup Trucks 2WD": LARGE,
    "Small Pickup Trucks 4WD": LARGE,
    "Standard Pickup Trucks": LARGE,
    "Standard Pickup Trucks 2WD": LARGE,
    "Standard Pickup Trucks 4WD": LARGE,
    "Standard Pickup Trucks/2wd": LARGE,
    "Special Purpose Vehicle 2WD": LARGE,
    "Special Purpose Vehicle 4WD": LARGE,
    "Special Purpose Vehicles": LARGE,
    "Special Purpose Vehicles/2wd": LARGE,
    "Special Purpose Vehicles/4wd": LARGE,
    "Minivan - 2WD": LARGE,
    "Minivan - 4WD": LARGE,
    "Sport Utility Vehicle - 2WD": LARGE,
    "Sport Utility Vehicle - 4WD": LARGE,
    "Small Sport Utility Vehicle 2WD": LARGE,
    "Small Sport Utility Vehicle 4WD": LARGE,
    "Standard Sport Utility Vehicle 2WD": LARGE,
    "Standard Sport Utility Vehicle 4WD": LARGE,
}

# header name -> normalized field name
HEADER_FIELDS = {
    "make": "make",
    "model": "model",
    "VClass": "type",
    "year": "year",
}

# manufacturer value used by the source for placeholder rows
NO_MAKE = "0"


class ParsedRow(NamedTuple):
    make: str
    model: str
    type: Optional[str]
    year: int


@dataclass
class FieldMap:
    """Column positions of the consumed fields; None means not in the header."""
    make: Optional[int] = None
    model: Optional[int] = None
    type: Optional[int] = None
    year: Optional[int] = None

    @property
    def complete(self) -> bool:
        return None not in (self.make, self.model, self.type, self.year)


def split_line(line: str) -> List[str]:
    return line.rstrip("\r\n").split(",")


def class_bucket(vclass: str) -> Optional[str]:
    return CLASS_BUCKETS.get(vclass)


def parse_header(line: str) -> FieldMap:
    fields = FieldMap()
    for pos, name in enumerate(split_line(line)):
        target = HEADER_FIELDS.get(name)
        if target is not None:
            setattr(fields, target, pos)
    return fields


def parse_row(fields: FieldMap, line: str) -> Optional[ParsedRow]:
    """Normalize one data line, or return None when the row carries no usable data."""
    if not fields.complete:
        return None
    cols = split_line(line)
    if max(fields.make, fields.model, fields.type, fields.year) >= len(cols):
        return None

    make = cols[fields.make]
    if make == NO_MAKE:
        return None
    raw_year = cols[fields.year]
    # plain ASCII digits only: int() would also take " 2001", "+2001" or "2_001"
    if not (raw_year.isascii() and raw_year.isdigit()):
        return None
    year = int(raw_year)

    return ParsedRow(
        make=make,
        model=cols[fields.model],
        type=class_bucket(cols[fields.type]),
        year=year,
    )
