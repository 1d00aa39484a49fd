# carsdb/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class CarOut(BaseModel):
    # every field is optional: responses carry only the selected ones
    id: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    years: Optional[List[int]] = None

class FetchRequest(BaseModel):
    ids: List[str] = Field(default_factory=list)
    selected_fields: Optional[List[str]] = None

class HealthOut(BaseModel):
    status: str
    records: int
    brands: int
    loaded_at: Optional[datetime] = None
    source: Optional[str] = None
