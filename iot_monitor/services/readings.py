from typing import Any, Dict, List, Optional
import logging

from iot_monitor.models.sensor import Sensor, Reading
from iot_monitor.services.base import EntityService
from iot_monitor.services.sequence import READINGS
from iot_monitor.services.validation import validate_reading, parse_timestamp

logger = logging.getLogger(__name__)


def sensor_snapshot(sensor: Optional[Sensor]) -> Optional[Dict[str, Any]]:
    """Copy of the sensor fields embedded in reading responses"""
    if sensor is None:
        return None
    return {
        "id": sensor.id,
        "id_sensor": sensor.id_sensor,
        "type": sensor.type,
        "unit": sensor.unit,
        "location": sensor.location,
        "model": sensor.model,
    }


class ReadingService(EntityService):
    model = Reading
    id_field = "reading_id"
    id_key = "readingId"
    sequence = READINGS
    fields = {"idSensor": "id_sensor", "time": "time", "value": "value"}
    not_found = "Lectura no encontrada"
    validator = validate_reading

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._values(data)
        if values.get("time") is not None:
            values["time"] = parse_timestamp(values["time"])
        else:
            values.pop("time", None)
        return values

    def _with_sensor(self, reading: Reading, sensors: Dict[int, Sensor]) -> Dict[str, Any]:
        return {
            "id": reading.id,
            "reading_id": reading.reading_id,
            "id_sensor": reading.id_sensor,
            "time": reading.time,
            "value": reading.value,
            "sensor": sensor_snapshot(sensors.get(reading.id_sensor)),
        }

    def _sensors_for(self, readings: List[Reading]) -> Dict[int, Sensor]:
        ids = {r.id_sensor for r in readings}
        if not ids:
            return {}
        sensors = self.db.query(Sensor).filter(Sensor.id_sensor.in_(ids)).all()
        return {s.id_sensor: s for s in sensors}

    def find_all(self) -> List[Dict[str, Any]]:
        readings = super().find_all()
        sensors = self._sensors_for(readings)
        return [self._with_sensor(r, sensors) for r in readings]

    def find_one(self, reading_id: int) -> Dict[str, Any]:
        reading = self._find(reading_id)
        return self._with_sensor(reading, self._sensors_for([reading]))

    def _find(self, reading_id: int) -> Reading:
        return super().find_one(reading_id)

    def update(self, reading_id: int, data: Dict[str, Any]) -> Reading:
        self._reject_id_fields(data)
        reading = self._find(reading_id)
        self._validate(data, existing=reading)
        for attr, value in self._values(data).items():
            setattr(reading, attr, value)
        self._commit()
        self.db.refresh(reading)
        logger.info(f"Updated reading {reading_id}")
        return reading

    def delete(self, reading_id: int) -> Reading:
        reading = self._find(reading_id)
        self.db.delete(reading)
        self._commit()
        logger.info(f"Deleted reading {reading_id}")
        return reading
