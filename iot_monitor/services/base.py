"""
Shared plumbing for the entity services: lookups by sequential id,
id-field protection, commits and the delete guard
"""
from typing import Any, Callable, Dict, List
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from iot_monitor.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from iot_monitor.services.sequence import SequenceGenerator

logger = logging.getLogger(__name__)


class EntityService:
    model = None
    id_field = ""           # sequential id attribute on the model
    id_key = ""             # sequential id as named in the API
    sequence = ""           # counter name
    fields: Dict[str, str] = {}  # writable API field -> model attribute
    not_found = "Registro no encontrado"
    duplicate = "El registro ya existe"
    validator: Callable = None

    def __init__(self, db: Session):
        self.db = db
        self.sequences = SequenceGenerator(db)

    # ---------- lookups ----------
    def _id_column(self):
        return getattr(self.model, self.id_field)

    def _get(self, entity_id: int):
        return self.db.query(self.model).filter(self._id_column() == int(entity_id)).first()

    def find_all(self) -> List[Any]:
        return self.db.query(self.model).order_by(self._id_column()).all()

    def find_one(self, entity_id: int):
        record = self._get(entity_id)
        if not record:
            raise NotFoundError(self.not_found)
        return record

    # ---------- validation ----------
    def _validate(self, data: Dict[str, Any], existing=None):
        errors = type(self).validator(self.db, data, existing)
        if errors:
            logger.warning(f"Rejected {self.sequence} payload: {errors}")
            raise ValidationError(errors)

    def _reject_id_fields(self, data: Dict[str, Any]):
        if any(data.get(key) is not None for key in ("id", "_id", self.id_key)):
            raise ValidationError("No se puede modificar el ID")

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Model attributes for the writable keys present in ``data``"""
        return {attr: data[key] for key, attr in self.fields.items() if key in data}

    # ---------- persistence ----------
    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error on {self.sequence}: {str(e.orig)}")
            raise ValidationError(self.duplicate) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage error on {self.sequence}: {str(e)}")
            raise StorageError("Error al acceder a la base de datos") from e

    def _insert(self, values: Dict[str, Any]):
        """Assign the next sequential id and stage the new record"""
        values[self.id_field] = self.sequences.next_id(self.sequence)
        record = self.model(**values)
        self.db.add(record)
        return record

    def _guard(self, child_model, column, parent_id: int, message: str):
        """Refuse to delete a parent while any child still points at it"""
        if self.db.query(child_model).filter(column == parent_id).first() is not None:
            logger.warning(f"Delete of {self.sequence} {parent_id} blocked: {message}")
            raise ConflictError(message)

    def check_delete(self, record):
        pass

    # ---------- default CRUD ----------
    def create(self, data: Dict[str, Any]):
        self._validate(data)
        record = self._insert(self._values(data))
        self._commit()
        self.db.refresh(record)
        logger.info(f"Created {self.sequence} {getattr(record, self.id_field)}")
        return record

    def update(self, entity_id: int, data: Dict[str, Any]):
        self._reject_id_fields(data)
        record = self.find_one(entity_id)
        self._validate(data, existing=record)
        for attr, value in self._values(data).items():
            setattr(record, attr, value)
        self._commit()
        self.db.refresh(record)
        logger.info(f"Updated {self.sequence} {entity_id}")
        return record

    def delete(self, entity_id: int):
        record = self.find_one(entity_id)
        self.check_delete(record)
        self.db.delete(record)
        self._commit()
        logger.info(f"Deleted {self.sequence} {entity_id}")
        return record
