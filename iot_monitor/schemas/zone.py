from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class ZoneResponse(BaseModel):
    id: int
    id_zone: int
    name: str
    description: Optional[str] = None
    active: Optional[bool] = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class ZoneDeleted(BaseModel):
    message: str
    zone: ZoneResponse
