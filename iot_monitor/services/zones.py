from typing import Any, Dict, List
import logging

from iot_monitor.models.zone import Zone
from iot_monitor.models.device import Device
from iot_monitor.services.base import EntityService
from iot_monitor.services.sequence import ZONES
from iot_monitor.services.validation import validate_zone

logger = logging.getLogger(__name__)


class ZoneService(EntityService):
    model = Zone
    id_field = "id_zone"
    id_key = "id_zone"
    sequence = ZONES
    fields = {"name": "name", "description": "description", "active": "active"}
    not_found = "Zona no encontrada"
    validator = validate_zone

    def find_devices(self, id_zone: int) -> List[Device]:
        """Devices installed in the zone"""
        zone = self.find_one(id_zone)
        return self.db.query(Device).filter(Device.zone_id == zone.id_zone).order_by(Device.id_device).all()

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._values(data)
        if isinstance(values.get("name"), str):
            values["name"] = values["name"].strip()
        return values

    def update(self, id_zone: int, data: Dict[str, Any]):
        self._reject_id_fields(data)
        zone = self.find_one(id_zone)
        self._validate(data, existing=zone)
        values = self._values(data)
        for attr, value in values.items():
            setattr(zone, attr, value)

        devices = []
        if "name" in values:
            # Devices keep a copy of their zone name in `location`
            devices = self.db.query(Device).filter(Device.zone_id == zone.id_zone).all()
            for device in devices:
                device.location = values["name"]

        self._commit()
        self.db.refresh(zone)
        logger.info(f"Updated zone {id_zone}, refreshed location of {len(devices)} devices")
        return zone

    def check_delete(self, zone: Zone):
        self._guard(Device, Device.zone_id, zone.id_zone,
                    "No se puede eliminar la zona porque tiene dispositivos asociados")
