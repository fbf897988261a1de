# iot_monitor/routers/sensors.py
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from iot_monitor.database import get_db
from iot_monitor.services.sensors import SensorService
from iot_monitor.schemas.sensor import SensorResponse, SensorDeleted

router = APIRouter(prefix="/api/v1/sensors", tags=["sensors"])

@router.get("/", response_model=List[SensorResponse])
async def list_sensors(db: Session = Depends(get_db)):
    return SensorService(db).find_all()

@router.get("/{sensor_id}", response_model=SensorResponse)
async def get_sensor(sensor_id: int, db: Session = Depends(get_db)):
    return SensorService(db).find_one(sensor_id)

# ---------- Alta: el sensor queda registrado en su dispositivo ----------
@router.post("/", response_model=SensorResponse, status_code=201)
async def create_sensor(data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return SensorService(db).create(data)

@router.patch("/{sensor_id}", response_model=SensorResponse)
async def update_sensor(sensor_id: int, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return SensorService(db).update(sensor_id, data)

@router.delete("/{sensor_id}", response_model=SensorDeleted)
async def delete_sensor(sensor_id: int, db: Session = Depends(get_db)):
    sensor = SensorService(db).delete(sensor_id)
    return {"message": "Sensor eliminado correctamente", "sensor": sensor}
