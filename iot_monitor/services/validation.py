"""
Validation rules for every entity.

Each ``validate_*`` function returns the list of violations found (empty when
the input is valid). Passing ``existing`` switches to update mode: only the
keys present in ``data`` are checked, and cross-field rules look at the
existing record merged with the patch.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import re

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from iot_monitor.models.user import User
from iot_monitor.models.zone import Zone
from iot_monitor.models.device import Device
from iot_monitor.models.sensor import Sensor

USER_ROLES = ["viewer", "admin", "technician"]
DEVICE_STATUSES = ["active", "maintenance", "offline"]
SENSOR_TYPES = ["temperature", "humidity", "co2", "noise"]
SENSOR_UNITS = ["°C", "%", "ppm"]

# sensor type -> the only unit it may report in
SENSOR_TYPE_UNITS = {
    "temperature": ("°C", "Para temperatura la unidad debe ser °C"),
    "humidity": ("%", "Para humedad la unidad debe ser %"),
}

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

# attributes of an existing sensor that the unit rule reads
SENSOR_FIELDS = {"type": "type", "unit": "unit"}

_timestamp_adapter = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, epoch number or datetime; ``None`` if unparseable"""
    if isinstance(value, bool) or value is None or value == "":
        return None
    try:
        parsed = _timestamp_adapter.validate_python(value)
    except PydanticValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _checked(data: Dict[str, Any], key: str, update: bool) -> bool:
    return not update or key in data


def _missing(value: Any) -> bool:
    return value is None or value == ""


def _merged(data: Dict[str, Any], existing, fields: Dict[str, str]) -> Dict[str, Any]:
    """Existing record (by API field name) overlaid with the patch"""
    view = {}
    if existing is not None:
        for api_name, attr in fields.items():
            view[api_name] = getattr(existing, attr)
    view.update(data)
    return view


def _check_text(errors, data, key, update, required_msg, type_msg):
    if not _checked(data, key, update):
        return
    value = data.get(key)
    if _missing(value):
        errors.append(required_msg)
    elif not isinstance(value, str):
        errors.append(type_msg)


def _unique_taken(db: Session, model, column, value, existing) -> bool:
    query = db.query(model).filter(column == value)
    if existing is not None:
        query = query.filter(model.id != existing.id)
    return query.first() is not None


def validate_user(db: Session, data: Dict[str, Any], existing: Optional[User] = None) -> List[str]:
    errors: List[str] = []
    update = existing is not None

    _check_text(errors, data, "name", update, "El nombre es requerido", "El nombre debe ser texto")

    if _checked(data, "email", update):
        email = data.get("email")
        if _missing(email):
            errors.append("El email es requerido")
        elif not isinstance(email, str) or not EMAIL_RE.match(email):
            errors.append("Email inválido")
        elif _unique_taken(db, User, User.email, email, existing):
            errors.append("El email ya existe")

    if _checked(data, "password", update):
        password = data.get("password")
        if _missing(password):
            errors.append("La contraseña es requerida")
        elif not isinstance(password, str):
            errors.append("La contraseña debe ser texto")
        elif len(password) < 6:
            errors.append("La contraseña debe tener al menos 6 caracteres")

    role = data.get("role")
    if role is not None and role not in USER_ROLES:
        errors.append(f"Rol inválido. Debe ser: {', '.join(USER_ROLES)}")

    return errors


def validate_zone(db: Session, data: Dict[str, Any], existing: Optional[Zone] = None) -> List[str]:
    errors: List[str] = []
    update = existing is not None

    if _checked(data, "name", update):
        name = data.get("name")
        if _missing(name):
            errors.append("El nombre de la zona es requerido")
        elif not isinstance(name, str):
            errors.append("El nombre debe ser texto")
        elif len(name.strip()) < 3:
            errors.append("El nombre debe tener al menos 3 caracteres")

    description = data.get("description")
    if description is not None:
        if not isinstance(description, str):
            errors.append("La descripción debe ser texto")
        elif len(description) > 500:
            errors.append("La descripción es demasiado larga (máx 500 caracteres)")

    if "active" in data and not isinstance(data["active"], bool):
        errors.append('El campo "active" debe ser verdadero o falso')

    return errors


def validate_device(db: Session, data: Dict[str, Any], existing: Optional[Device] = None) -> List[str]:
    errors: List[str] = []
    update = existing is not None

    if _checked(data, "serialNumber", update):
        serial = data.get("serialNumber")
        if _missing(serial):
            errors.append("El serialNumber es requerido")
        elif not isinstance(serial, str):
            errors.append("El serialNumber debe ser texto")
        elif _unique_taken(db, Device, Device.serial_number, serial, existing):
            errors.append("El serialNumber ya existe")

    _check_text(errors, data, "model", update, "El modelo es requerido", "El modelo debe ser texto")

    if _checked(data, "ownerId", update):
        owner_id = data.get("ownerId")
        if not is_number(owner_id):
            errors.append("ownerId debe ser numérico")
        elif db.query(User).filter(User.id_user == owner_id).first() is None:
            errors.append("El usuario indicado no existe")

    if _checked(data, "zoneId", update):
        zone_id = data.get("zoneId")
        if not is_number(zone_id):
            errors.append("zoneId debe ser numérico")
        elif db.query(Zone).filter(Zone.id_zone == zone_id).first() is None:
            errors.append("La zona indicada no existe")

    if data.get("installedAt") is not None and parse_timestamp(data["installedAt"]) is None:
        errors.append("La fecha de instalación (installedAt) no es válida")

    status = data.get("status")
    if status is not None and status not in DEVICE_STATUSES:
        errors.append(f"El estado debe ser uno de: {', '.join(DEVICE_STATUSES)}")

    return errors


def validate_sensor(db: Session, data: Dict[str, Any], existing: Optional[Sensor] = None) -> List[str]:
    errors: List[str] = []
    update = existing is not None

    if _checked(data, "type", update):
        if _missing(data.get("type")):
            errors.append("El tipo de sensor es requerido")
        elif data["type"] not in SENSOR_TYPES:
            errors.append(f"El tipo debe ser uno de: {', '.join(SENSOR_TYPES)}")

    if _checked(data, "unit", update):
        if _missing(data.get("unit")):
            errors.append("La unidad de medida es requerida")
        elif data["unit"] not in SENSOR_UNITS:
            errors.append(f"La unidad debe ser una de: {', '.join(SENSOR_UNITS)}")

    view = _merged(data, existing, SENSOR_FIELDS)
    sensor_type = view.get("type")
    expected = SENSOR_TYPE_UNITS.get(sensor_type) if isinstance(sensor_type, str) else None
    if expected and view.get("unit") in SENSOR_UNITS and view["unit"] != expected[0]:
        errors.append(expected[1])

    _check_text(errors, data, "model", update, "El modelo del sensor es requerido", "El modelo debe ser texto")

    if _checked(data, "deviceId", update):
        device_id = data.get("deviceId")
        if device_id is None:
            errors.append("El ID del dispositivo es requerido")
        elif not is_number(device_id):
            errors.append("deviceId debe ser numérico")
        elif db.query(Device).filter(Device.id_device == device_id).first() is None:
            errors.append("El dispositivo indicado no existe")

    _check_text(errors, data, "location", update,
                "La ubicación (location) es requerida", "La ubicación debe ser texto")

    if "isActive" in data and not isinstance(data["isActive"], bool):
        errors.append("isActive debe ser true/false")

    return errors


def validate_reading(db: Session, data: Dict[str, Any], existing=None) -> List[str]:
    errors: List[str] = []
    update = existing is not None

    if _checked(data, "idSensor", update):
        id_sensor = data.get("idSensor")
        if id_sensor is None:
            errors.append("idSensor es requerido")
        elif not is_number(id_sensor):
            errors.append("idSensor debe ser numérico")
        elif db.query(Sensor).filter(Sensor.id_sensor == id_sensor).first() is None:
            errors.append("El sensor indicado no existe")

    if _checked(data, "value", update):
        value = data.get("value")
        if value is None:
            errors.append("El valor de la lectura es requerido")
        elif not is_number(value):
            errors.append("El valor debe ser numérico")

    if data.get("time") is not None and parse_timestamp(data["time"]) is None:
        errors.append("La fecha (time) no es válida")

    return errors
