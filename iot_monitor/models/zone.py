from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from iot_monitor.database import Base

class Zone(Base):
    __tablename__ = "zones"
    
    id = Column(Integer, primary_key=True, index=True)
    id_zone = Column(Integer, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)  # "Zona Centro"
    description = Column(String)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
