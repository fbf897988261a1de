from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from iot_monitor.database import get_db
from iot_monitor.services.devices import DeviceService
from iot_monitor.schemas.device import DeviceResponse, DeviceDeleted

router = APIRouter(prefix="/api/v1/devices", tags=["devices"])

@router.get("/", response_model=List[DeviceResponse])
async def list_devices(db: Session = Depends(get_db)):
    """Get all devices"""
    return DeviceService(db).find_all()

@router.get("/{device_id}", response_model=DeviceResponse)
async def get_device(device_id: int, db: Session = Depends(get_db)):
    """Get device by sequential ID"""
    return DeviceService(db).find_one(device_id)

@router.post("/", response_model=DeviceResponse, status_code=201)
async def create_device(data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Register a device for an existing owner and zone"""
    return DeviceService(db).create(data)

@router.patch("/{device_id}", response_model=DeviceResponse)
async def update_device(device_id: int, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Partially update a device"""
    return DeviceService(db).update(device_id, data)

@router.delete("/{device_id}", response_model=DeviceDeleted)
async def delete_device(device_id: int, db: Session = Depends(get_db)):
    """Delete a device without sensors"""
    device = DeviceService(db).delete(device_id)
    return {"message": "Dispositivo eliminado correctamente", "device": device}
