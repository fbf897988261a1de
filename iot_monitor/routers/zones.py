from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from iot_monitor.database import get_db
from iot_monitor.services.zones import ZoneService
from iot_monitor.schemas.zone import ZoneResponse, ZoneDeleted
from iot_monitor.schemas.device import DeviceResponse

router = APIRouter(prefix="/api/v1/zones", tags=["zones"])

@router.get("/", response_model=List[ZoneResponse])
async def get_zones(db: Session = Depends(get_db)):
    """Get all zones"""
    return ZoneService(db).find_all()

@router.get("/{zone_id}", response_model=ZoneResponse)
async def get_zone(zone_id: int, db: Session = Depends(get_db)):
    """Get zone by sequential ID"""
    return ZoneService(db).find_one(zone_id)

@router.get("/{zone_id}/devices", response_model=List[DeviceResponse])
async def get_zone_devices(zone_id: int, db: Session = Depends(get_db)):
    """Get the devices installed in a zone"""
    return ZoneService(db).find_devices(zone_id)

@router.post("/", response_model=ZoneResponse, status_code=201)
async def create_zone(data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Create new zone"""
    return ZoneService(db).create(data)

@router.patch("/{zone_id}", response_model=ZoneResponse)
async def update_zone(zone_id: int, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Partially update a zone"""
    return ZoneService(db).update(zone_id, data)

@router.delete("/{zone_id}", response_model=ZoneDeleted)
async def delete_zone(zone_id: int, db: Session = Depends(get_db)):
    """Delete a zone without devices"""
    zone = ZoneService(db).delete(zone_id)
    return {"message": "Zona eliminada correctamente", "zone": zone}
