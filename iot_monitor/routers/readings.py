# iot_monitor/routers/readings.py
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from iot_monitor.database import get_db
from iot_monitor.services.readings import ReadingService
from iot_monitor.schemas.sensor import ReadingResponse, ReadingDetailResponse

router = APIRouter(prefix="/api/v1/readings", tags=["readings"])

# ---------- Lecturas con copia del sensor (o null si ya no existe) ----------
@router.get("/", response_model=List[ReadingDetailResponse])
async def list_readings(db: Session = Depends(get_db)):
    return ReadingService(db).find_all()

@router.get("/{reading_id}", response_model=ReadingDetailResponse)
async def get_reading(reading_id: int, db: Session = Depends(get_db)):
    return ReadingService(db).find_one(reading_id)

@router.post("/", response_model=ReadingResponse, status_code=201)
async def create_reading(data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return ReadingService(db).create(data)

@router.patch("/{reading_id}", response_model=ReadingResponse)
async def update_reading(reading_id: int, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return ReadingService(db).update(reading_id, data)

@router.delete("/{reading_id}", response_model=ReadingResponse)
async def delete_reading(reading_id: int, db: Session = Depends(get_db)):
    return ReadingService(db).delete(reading_id)
