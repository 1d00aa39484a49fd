import sys
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def print_summary(store):
    snapshot = store.current
    print(f"Snapshot holds {len(snapshot)} car(s) across {len(snapshot.brands)} brand(s).")
    for brand in snapshot.brands[:10]:
        print(f"  {brand}: {len(snapshot.cars(brand))}")
    if len(snapshot.brands) > 10:
        print(f"  ... and {len(snapshot.brands) - 10} more")


if __name__ == "__main__":
    print("Running one cars database refresh cycle from project root...")

    try:
        from carsdb.config import settings
        from carsdb.db import store
        from carsdb.scheduler import build_coordinator
    except Exception as e:
        raise SystemExit(f"Failed to import 'carsdb': {e}")

    coordinator = build_coordinator(settings, store)
    result = coordinator.run_cycle()
    print(f"lease acquired: {result.lease_acquired}, dataset updated: {result.updated}")

    if not result.published:
        print(f"Refresh failed: {result.error}")
        sys.exit(1)

    print_summary(store)
