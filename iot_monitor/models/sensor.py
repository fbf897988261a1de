from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float
from sqlalchemy.sql import func
from iot_monitor.database import Base, get_utc_datetime

class Sensor(Base):
    __tablename__ = "sensors"
    
    id = Column(Integer, primary_key=True, index=True)
    id_sensor = Column(Integer, unique=True, index=True, nullable=False)
    type = Column(String, nullable=False)  # "temperature", "humidity", "co2", "noise"
    unit = Column(String, nullable=False)  # "°C", "%", "ppm"
    model = Column(String, nullable=False)  # "DHT22"
    device_id = Column(Integer, index=True, nullable=False)  # Device.id_device
    location = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

class Reading(Base):
    __tablename__ = "readings"
    
    id = Column(Integer, primary_key=True, index=True)
    reading_id = Column(Integer, unique=True, index=True, nullable=False)
    id_sensor = Column(Integer, index=True, nullable=False)  # Sensor.id_sensor
    value = Column(Float, nullable=False)
    time = Column(DateTime(timezone=True), default=get_utc_datetime)
