"""
Database initialization
Creates the tables and lines the id counters up with the stored records
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from iot_monitor.database import SessionLocal, engine
from iot_monitor.models import Base, User, Zone, Device, Sensor, Reading
from iot_monitor.services.sequence import SequenceGenerator, USERS, ZONES, DEVICES, SENSORS, READINGS

logger = logging.getLogger(__name__)

SEQUENCED_COLUMNS = {
    USERS: User.id_user,
    ZONES: Zone.id_zone,
    DEVICES: Device.id_device,
    SENSORS: Sensor.id_sensor,
    READINGS: Reading.reading_id,
}

def sync_counters(db: Session):
    """Make sure every counter is at least the highest sequential id in use"""
    sequences = SequenceGenerator(db)
    result = {}
    for name, column in SEQUENCED_COLUMNS.items():
        highest = db.query(func.max(column)).scalar() or 0
        result[name] = sequences.sync(name, highest)
    return result

def init_database(bind=None, session_factory=None):
    """Create tables and synchronise counters"""
    Base.metadata.create_all(bind=bind or engine)
    
    db = (session_factory or SessionLocal)()
    try:
        counters = sync_counters(db)
        logger.info(f"Database ready, counters: {counters}")
    finally:
        db.close()
