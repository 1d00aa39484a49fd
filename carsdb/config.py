# carsdb/config.py
"""Service settings read from the environment (and `.env` when present)."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_URL = "https://www.fueleconomy.gov/feg/epadata/vehicles.csv.zip"
DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


@dataclass(frozen=True)
class Settings:
    data_url: str = os.getenv("CARS_DATA_URL", DEFAULT_DATA_URL)
    # seconds between refresh cycles
    update_interval: int = int(os.getenv("CARS_DATA_UPDATE_INTERVAL", "86400"))
    data_dir: str = os.getenv("CARS_DATA_DIR", DEFAULT_DATA_DIR)
    data_file: str = os.getenv("CARS_DATA_FILE", "vehicles.csv")
    fetch_timeout: float = float(os.getenv("CARS_FETCH_TIMEOUT", "120"))
    redis_url: Optional[str] = os.getenv("REDIS_URL") or None
    lock_key: Optional[str] = os.getenv("CARS_LOCK_KEY") or None
    # must outlive the slowest dataset download (3 tries of fetch_timeout plus
    # backoff); the lease is never renewed
    lock_ttl: int = int(os.getenv("CARS_LOCK_TTL", "420"))

    @property
    def data_path(self) -> str:
        return os.path.join(self.data_dir, self.data_file)


settings = Settings()
