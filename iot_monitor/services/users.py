from typing import Any, Dict, List

from iot_monitor.models.user import User
from iot_monitor.models.device import Device
from iot_monitor.services.base import EntityService
from iot_monitor.services.sequence import USERS
from iot_monitor.services.validation import validate_user


class UserService(EntityService):
    model = User
    id_field = "id_user"
    id_key = "idUser"
    sequence = USERS
    fields = {"name": "name", "email": "email", "password": "password", "role": "role"}
    not_found = "Usuario no encontrado"
    duplicate = "El email ya existe"
    validator = validate_user

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._values(data)
        if values.get("role") is None:
            values.pop("role", None)
        return values

    def find_devices(self, id_user: int) -> List[Device]:
        """Devices owned by the user"""
        user = self.find_one(id_user)
        return self.db.query(Device).filter(Device.owner_id == user.id_user).order_by(Device.id_device).all()

    def check_delete(self, user: User):
        self._guard(Device, Device.owner_id, user.id_user,
                    "No se puede eliminar el usuario porque tiene dispositivos asociados")
