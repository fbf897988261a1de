from typing import Any, Dict
import logging

from iot_monitor.models.device import Device
from iot_monitor.models.sensor import Sensor, Reading
from iot_monitor.services.base import EntityService
from iot_monitor.services.sequence import SENSORS
from iot_monitor.services.validation import validate_sensor

logger = logging.getLogger(__name__)


class SensorService(EntityService):
    """Sensors, keeping ``Device.sensors`` in step with ``Sensor.device_id``.

    The back-reference list is only modified through ``_attach`` and
    ``_detach`` and always in the same commit as the sensor itself.
    """

    model = Sensor
    id_field = "id_sensor"
    id_key = "idSensor"
    sequence = SENSORS
    fields = {
        "type": "type",
        "unit": "unit",
        "model": "model",
        "deviceId": "device_id",
        "location": "location",
        "isActive": "is_active",
    }
    not_found = "Sensor no encontrado"
    validator = validate_sensor

    def _device(self, id_device: int):
        return self.db.query(Device).filter(Device.id_device == id_device).first()

    def _attach(self, sensor: Sensor, id_device: int):
        device = self._device(id_device)
        if device is None:
            return
        current = list(device.sensors or [])
        if sensor.id not in current:
            device.sensors = current + [sensor.id]

    def _detach(self, sensor: Sensor, id_device: int):
        device = self._device(id_device)
        if device is None:
            return
        device.sensors = [sid for sid in (device.sensors or []) if sid != sensor.id]

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._values(data)
        if values.get("is_active") is None:
            values.pop("is_active", None)
        return values

    def create(self, data: Dict[str, Any]) -> Sensor:
        self._validate(data)
        sensor = self._insert(self._values(data))
        self.db.flush()
        self._attach(sensor, sensor.device_id)
        self._commit()
        self.db.refresh(sensor)
        logger.info(f"Created sensor {sensor.id_sensor} on device {sensor.device_id}")
        return sensor

    def update(self, id_sensor: int, data: Dict[str, Any]) -> Sensor:
        self._reject_id_fields(data)
        sensor = self.find_one(id_sensor)
        self._validate(data, existing=sensor)

        old_device_id = sensor.device_id
        for attr, value in self._values(data).items():
            setattr(sensor, attr, value)
        if sensor.device_id != old_device_id:
            self._detach(sensor, old_device_id)
            self._attach(sensor, sensor.device_id)
            logger.info(f"Sensor {id_sensor} moved from device {old_device_id} to {sensor.device_id}")

        self._commit()
        self.db.refresh(sensor)
        return sensor

    def check_delete(self, sensor: Sensor):
        self._guard(Reading, Reading.id_sensor, sensor.id_sensor,
                    "No se puede eliminar el sensor porque tiene lecturas asociadas")

    def delete(self, id_sensor: int) -> Sensor:
        sensor = self.find_one(id_sensor)
        self.check_delete(sensor)
        self._detach(sensor, sensor.device_id)
        self.db.delete(sensor)
        self._commit()
        logger.info(f"Deleted sensor {id_sensor}")
        return sensor
