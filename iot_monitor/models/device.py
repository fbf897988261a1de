from sqlalchemy import Column, Integer, String, JSON, DateTime
from sqlalchemy.sql import func
from iot_monitor.database import Base, get_utc_datetime

class Device(Base):
    __tablename__ = "devices"
    
    id = Column(Integer, primary_key=True, index=True)
    id_device = Column(Integer, unique=True, index=True, nullable=False)
    serial_number = Column(String, unique=True, index=True, nullable=False)
    model = Column(String, nullable=False)  # "ESP32"
    owner_id = Column(Integer, index=True, nullable=False)  # User.id_user
    zone_id = Column(Integer, index=True, nullable=False)  # Zone.id_zone
    installed_at = Column(DateTime(timezone=True), default=get_utc_datetime)
    status = Column(String, default="active")  # "active", "maintenance", "offline"
    location = Column(String)  # copy of the zone name
    sensors = Column(JSON, default=list)  # Sensor.id of the sensors mounted on this device
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
