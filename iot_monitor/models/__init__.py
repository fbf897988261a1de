from iot_monitor.database import Base
from .user import User
from .zone import Zone
from .device import Device
from .sensor import Sensor, Reading
from .counter import Counter

__all__ = [
    "Base",
    "User",
    "Zone",
    "Device",
    "Sensor",
    "Reading",
    "Counter"
]
