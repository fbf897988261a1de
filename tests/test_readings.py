import pytest

from iot_monitor.exceptions import NotFoundError, ValidationError
from iot_monitor.models.sensor import Sensor


def test_create_reading_defaults_time(readings, sensor):
    reading = readings.create({"idSensor": sensor.id_sensor, "value": 21})
    assert reading.reading_id == 1
    assert reading.value == 21.0
    assert reading.time is not None


def test_create_reading_with_time(readings, sensor):
    reading = readings.create({"idSensor": sensor.id_sensor, "value": 19.5, "time": "2024-03-01T08:30:00Z"})
    assert (reading.time.year, reading.time.month, reading.time.hour) == (2024, 3, 8)


def test_find_one_embeds_sensor_snapshot(readings, sensor):
    created = readings.create({"idSensor": sensor.id_sensor, "value": 21})
    found = readings.find_one(created.reading_id)
    assert found["value"] == 21
    assert found["sensor"] == {
        "id": sensor.id,
        "id_sensor": sensor.id_sensor,
        "type": "temperature",
        "unit": "°C",
        "location": "21.15,-101.71",
        "model": "DHT22",
    }


def test_snapshot_is_none_when_sensor_is_gone(readings, sensor, db):
    created = readings.create({"idSensor": sensor.id_sensor, "value": 21})
    # Bypass the delete guard to leave an orphan reading behind
    db.query(Sensor).filter(Sensor.id_sensor == sensor.id_sensor).delete()
    db.commit()

    assert readings.find_one(created.reading_id)["sensor"] is None
    assert [r["sensor"] for r in readings.find_all()] == [None]


def test_find_all_in_id_order(readings, sensor):
    for value in (1, 2, 3):
        readings.create({"idSensor": sensor.id_sensor, "value": value})
    assert [r["reading_id"] for r in readings.find_all()] == [1, 2, 3]
    assert all(r["sensor"]["id_sensor"] == sensor.id_sensor for r in readings.find_all())


def test_update_reading(readings, sensor):
    created = readings.create({"idSensor": sensor.id_sensor, "value": 21})
    assert readings.update(created.reading_id, {"value": 22.5}).value == 22.5

    with pytest.raises(ValidationError, match="El valor debe ser numérico"):
        readings.update(created.reading_id, {"value": "alto"})
    with pytest.raises(ValidationError, match="El sensor indicado no existe"):
        readings.update(created.reading_id, {"idSensor": 77})
    with pytest.raises(NotFoundError, match="Lectura no encontrada"):
        readings.update(99, {"value": 1})


def test_delete_reading(readings, sensor):
    reading_id = readings.create({"idSensor": sensor.id_sensor, "value": 21}).reading_id
    assert readings.delete(reading_id).reading_id == reading_id
    with pytest.raises(NotFoundError):
        readings.find_one(reading_id)
