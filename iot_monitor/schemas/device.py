from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

class DeviceResponse(BaseModel):
    id: int
    id_device: int
    serial_number: str = Field(alias="serialNumber")
    model: str
    owner_id: int = Field(alias="ownerId")
    zone_id: int = Field(alias="zoneId")
    installed_at: Optional[datetime] = Field(default=None, alias="installedAt")
    status: str = "active"
    location: Optional[str] = None
    sensors: List[int] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
        populate_by_name = True

class DeviceDeleted(BaseModel):
    message: str
    device: DeviceResponse
