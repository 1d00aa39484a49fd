# tests/conftest.py
import pytest
from carsdb.db import SnapshotStore
from carsdb.services import load_snapshot

HEADER = "barrels08,city08,make,model,VClass,year,youSaveSpend"

ROWS = [
    "1,19,Toyota,Corolla,Compact Cars,2003,-500",
    "1,19,Toyota,Corolla,Compact Cars,2001,-500",
    "1,17,Toyota,Camry,Midsize Cars,1999,-750",
    "1,22,Honda,Civic,Compact Cars,2005,0",
    "1,15,Toyota,Tacoma,Small Pickup Trucks,2010,-1250",
    "1,16,Toyota,Corolla,Compact Cars,2001,-500",
    "1,12,Alfa Romeo,Spider,Two Seaters,1985,-3000",
    "1,0,0,Unknown,Vans,2000,0",
    "1,14,Honda,Odyssey,Minivan - 2WD,n/a,0",
    "1,14,Honda,Element,Sport Utility Vehicle - 4WD,2004,0",
    "1,18,Toyota,Corolla,Compact Cars,1998,-500",
]


def write_csv(path, rows, header=HEADER):
    path.write_text("\n".join([header] + list(rows)) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def csv_path(tmp_path):
    return write_csv(tmp_path / "vehicles.csv", ROWS)


@pytest.fixture
def snapshot(csv_path):
    return load_snapshot(str(csv_path))


@pytest.fixture
def store(snapshot):
    return SnapshotStore(snapshot)


class FakeRedis:
    """Just enough of redis-py's `set` for lease tests."""

    def __init__(self):
        self.data = {}
        self.calls = []

    def set(self, key, value, ex=None, nx=False):
        self.calls.append((key, ex, nx))
        if nx and key in self.data:
            return None
        self.data[key] = value
        return True
