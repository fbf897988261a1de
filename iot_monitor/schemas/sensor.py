from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class SensorResponse(BaseModel):
    id: int
    id_sensor: int = Field(alias="idSensor")
    type: str
    unit: str
    model: str
    device_id: int = Field(alias="deviceId")
    location: str
    is_active: Optional[bool] = Field(default=True, alias="isActive")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
        populate_by_name = True

class SensorDeleted(BaseModel):
    message: str
    sensor: SensorResponse

class SensorSnapshot(BaseModel):
    id: int
    id_sensor: int = Field(alias="idSensor")
    type: str
    unit: str
    location: str
    model: str
    
    class Config:
        populate_by_name = True

class ReadingResponse(BaseModel):
    id: int
    reading_id: int = Field(alias="readingId")
    id_sensor: int = Field(alias="idSensor")
    value: float
    time: Optional[datetime] = None
    
    class Config:
        from_attributes = True
        populate_by_name = True

class ReadingDetailResponse(ReadingResponse):
    sensor: Optional[SensorSnapshot] = None
