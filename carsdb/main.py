from fastapi import FastAPI
from carsdb.api.routes import router as api_router
from carsdb.config import settings
from carsdb.db import store
from carsdb import scheduler
from carsdb.utils import logger

# create FastAPI instance
app = FastAPI(title="Cars dictionary")
app.include_router(api_router)


@app.on_event("startup")
def on_startup_load_cars():
    # first build runs before serving; failures leave the empty snapshot published
    coordinator = scheduler.build_coordinator(settings, store)
    coordinator.run_cycle()
    scheduler.start(coordinator, settings.update_interval)


@app.on_event("shutdown")
def on_shutdown_stop_scheduler():
    scheduler.stop()
    logger.info("Scheduler stopped")
