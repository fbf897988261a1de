from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from iot_monitor.database import Base

class User(Base):
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    id_user = Column(Integer, unique=True, index=True, nullable=False)  # sequential id ("idUser")
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String)
    role = Column(String, default="viewer")  # "viewer", "admin", "technician"
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
