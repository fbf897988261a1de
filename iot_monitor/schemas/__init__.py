from .user import UserResponse, UserDeleted
from .zone import ZoneResponse, ZoneDeleted
from .device import DeviceResponse, DeviceDeleted
from .sensor import SensorResponse, SensorDeleted, SensorSnapshot, ReadingResponse, ReadingDetailResponse

__all__ = [
    "UserResponse",
    "UserDeleted",
    "ZoneResponse",
    "ZoneDeleted",
    "DeviceResponse",
    "DeviceDeleted",
    "SensorResponse",
    "SensorDeleted",
    "SensorSnapshot",
    "ReadingResponse",
    "ReadingDetailResponse"
]
