from sqlalchemy import Column, Integer, String
from iot_monitor.database import Base

class Counter(Base):
    __tablename__ = "counters"
    
    name = Column(String, primary_key=True)  # "users", "zones", "devices", "sensors", "readings"
    seq = Column(Integer, nullable=False, default=0)
