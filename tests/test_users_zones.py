import pytest

from iot_monitor.exceptions import ConflictError, NotFoundError, ValidationError
from iot_monitor.models.user import User
from iot_monitor.services.sequence import SequenceGenerator, USERS


def test_create_user_assigns_sequential_ids(users):
    first = users.create({"name": "Juan", "email": "j@x.com", "password": "secret1"})
    second = users.create({"name": "Ana", "email": "a@x.com", "password": "secret2", "role": "admin"})
    assert (first.id_user, second.id_user) == (1, 2)
    assert first.role == "viewer"
    assert second.role == "admin"
    assert first.id != second.id


def test_create_user_missing_fields(users, db):
    with pytest.raises(ValidationError) as exc:
        users.create({"name": "Juan"})
    assert exc.value.errors == ["El email es requerido", "La contraseña es requerida"]
    assert str(exc.value) == "El email es requerido, La contraseña es requerida"
    assert db.query(User).count() == 0
    assert SequenceGenerator(db).current(USERS) == 0


def test_duplicate_email_rejected(users, owner):
    with pytest.raises(ValidationError, match="El email ya existe"):
        users.create({"name": "Otro", "email": "j@x.com", "password": "secret1"})


def test_update_user(users, owner):
    updated = users.update(owner.id_user, {"name": "Juan Pérez", "email": "j@x.com", "ignored": 1})
    assert updated.name == "Juan Pérez"
    assert updated.email == "j@x.com"


@pytest.mark.parametrize("payload", [{"idUser": 7}, {"id": 3}, {"_id": "abc"}])
def test_update_user_cannot_touch_ids(users, owner, payload):
    with pytest.raises(ValidationError, match="No se puede modificar el ID"):
        users.update(owner.id_user, payload)


def test_unknown_user(users):
    with pytest.raises(NotFoundError, match="Usuario no encontrado"):
        users.find_one(5)
    with pytest.raises(NotFoundError):
        users.update(5, {"name": "Nadie"})
    with pytest.raises(NotFoundError):
        users.delete(5)


def test_user_with_devices_cannot_be_deleted(users, devices, owner, device):
    with pytest.raises(ConflictError, match="tiene dispositivos asociados"):
        users.delete(owner.id_user)
    assert users.find_one(owner.id_user).email == "j@x.com"
    assert [d.id_device for d in users.find_devices(owner.id_user)] == [device.id_device]

    devices.delete(device.id_device)
    owner_id = owner.id_user
    assert users.delete(owner_id).id_user == owner_id
    assert users.find_all() == []


def test_zone_crud(zones):
    zone = zones.create({"name": "Zona Centro", "description": "Planta baja"})
    assert zone.id_zone == 1
    assert zone.active is True

    zone = zones.update(zone.id_zone, {"active": False})
    assert zone.active is False
    assert zone.name == "Zona Centro"

    with pytest.raises(ValidationError, match="No se puede modificar el ID"):
        zones.update(zone.id_zone, {"id_zone": 9})

    zone_id = zone.id_zone
    zones.delete(zone_id)
    with pytest.raises(NotFoundError, match="Zona no encontrada"):
        zones.find_one(zone_id)


def test_zone_ids_continue_after_delete(zones):
    first = zones.create({"name": "Norte"})
    zones.delete(first.id_zone)
    assert zones.create({"name": "Sur"}).id_zone == 2


def test_zone_with_devices_cannot_be_deleted(zones, devices, zone, device):
    with pytest.raises(ConflictError, match="No se puede eliminar la zona porque tiene dispositivos asociados"):
        zones.delete(zone.id_zone)
    assert zones.find_one(zone.id_zone).name == "Zona Centro"
    assert devices.find_one(device.id_device).zone_id == zone.id_zone


def test_zone_rename_refreshes_device_location(zones, devices, zone, device):
    assert device.location == "Zona Centro"
    zones.update(zone.id_zone, {"name": "Zona Norte"})
    assert devices.find_one(device.id_device).location == "Zona Norte"
    assert [d.id_device for d in zones.find_devices(zone.id_zone)] == [device.id_device]


def test_null_role_keeps_current_role(users, owner):
    users.update(owner.id_user, {"role": "admin"})
    updated = users.update(owner.id_user, {"role": None, "name": "Juan"})
    assert updated.role == "admin"


def test_zone_name_is_stored_trimmed(zones):
    zone = zones.create({"name": "  abc  "})
    assert zone.name == "abc"
    assert zones.update(zone.id_zone, {"name": " Zona Sur "}).name == "Zona Sur"


def test_zone_rename_is_a_single_commit(zones, devices, zone, device, monkeypatch):
    commits = []
    original_commit = zones.db.commit

    def counting_commit():
        commits.append(1)
        original_commit()

    monkeypatch.setattr(zones.db, "commit", counting_commit)
    zones.update(zone.id_zone, {"name": "Zona Este"})

    assert len(commits) == 1
    assert devices.find_one(device.id_device).location == "Zona Este"
