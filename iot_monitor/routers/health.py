from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from iot_monitor.database import get_db

router = APIRouter(tags=["health"])

@router.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "iot-monitor-api"}

@router.get("/api/v1/health")
async def api_health_check(db: Session = Depends(get_db)):
    """API health check endpoint, including a database round trip"""
    db.execute(text("SELECT 1"))
    return {"status": "ok", "api_version": "v1", "database": "ok"}
