# carsdb/api/routes.py
from fastapi import APIRouter, Depends, Query
from typing import List, Literal, Optional
from .. import schemas
from ..db import get_db
from ..queries import QueryEngine
from ..utils import profile

router = APIRouter()

def _fields(fields: Optional[List[str]]) -> Optional[List[str]]:
    # accept both ?fields=a&fields=b and ?fields=a,b
    if not fields:
        return None
    return [f for chunk in fields for f in chunk.split(",") if f]

@router.get("/health", response_model=schemas.HealthOut)
@profile
def health(db: QueryEngine = Depends(get_db)):
    snapshot = db.source.current
    return {
        "status": "ok",
        "records": len(snapshot),
        "brands": len(snapshot.brands),
        "loaded_at": snapshot.loaded_at,
        "source": snapshot.source,
    }

@router.get("/brands", response_model=List[str])
@profile
def brands(db: QueryEngine = Depends(get_db)):
    return db.brands()

@router.get(
    "/brands/{brand}/cars",
    response_model=List[schemas.CarOut],
    response_model_exclude_unset=True,
)
@profile
def list_cars(
    brand: str,
    fields: Optional[List[str]] = Query(None),
    sort: str = Query("model"),
    dir: Literal["asc", "desc"] = Query("asc"),
    db: QueryEngine = Depends(get_db)
):
    return db.list(brand, _fields(fields), sort, dir)

@router.get(
    "/cars/{car_id}",
    response_model=Optional[schemas.CarOut],
    response_model_exclude_unset=True,
)
@profile
def fetch_car(car_id: str, fields: Optional[List[str]] = Query(None), db: QueryEngine = Depends(get_db)):
    # unknown ids answer null, not 404
    return db.fetch(car_id, _fields(fields))

@router.post(
    "/cars/fetch",
    response_model=List[Optional[schemas.CarOut]],
    response_model_exclude_unset=True,
)
@profile
def fetch_cars(payload: schemas.FetchRequest, db: QueryEngine = Depends(get_db)):
    return db.fetch(payload.ids, payload.selected_fields)
