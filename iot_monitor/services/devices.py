from typing import Any, Dict
import logging

from iot_monitor.models.device import Device
from iot_monitor.models.sensor import Sensor
from iot_monitor.models.zone import Zone
from iot_monitor.services.base import EntityService
from iot_monitor.services.sequence import DEVICES
from iot_monitor.services.validation import validate_device, parse_timestamp

logger = logging.getLogger(__name__)


class DeviceService(EntityService):
    model = Device
    id_field = "id_device"
    id_key = "id_device"
    sequence = DEVICES
    fields = {
        "serialNumber": "serial_number",
        "model": "model",
        "ownerId": "owner_id",
        "zoneId": "zone_id",
        "installedAt": "installed_at",
        "status": "status",
    }
    not_found = "Dispositivo no encontrado"
    duplicate = "El serialNumber ya existe"
    validator = validate_device

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._values(data)
        if values.get("installed_at") is not None:
            values["installed_at"] = parse_timestamp(values["installed_at"])
        else:
            values.pop("installed_at", None)
        if values.get("status") is None:
            values.pop("status", None)
        if "zone_id" in values:
            zone = self.db.query(Zone).filter(Zone.id_zone == values["zone_id"]).first()
            values["location"] = zone.name
        return values

    def create(self, data: Dict[str, Any]) -> Device:
        self._validate(data)
        values = self._values(data)
        values["sensors"] = []
        device = self._insert(values)
        self._commit()
        self.db.refresh(device)
        logger.info(f"Created device {device.id_device} ({device.serial_number}) in zone {device.zone_id}")
        return device

    def check_delete(self, device: Device):
        self._guard(Sensor, Sensor.device_id, device.id_device,
                    "No se puede eliminar el dispositivo porque tiene sensores asociados")
