"""
Sequential id generation backed by the counters table
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects import postgresql, sqlite
import logging

from iot_monitor.models.counter import Counter
from iot_monitor.exceptions import StorageError

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE ... RETURNING
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

USERS = "users"
ZONES = "zones"
DEVICES = "devices"
SENSORS = "sensors"
READINGS = "readings"


class SequenceGenerator:
    """Issues monotonically increasing ids per entity type.

    Every increment is one upsert statement, so concurrent callers never get
    the same value. Services never touch the counters table directly.
    """

    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f"Atomic counters are not supported on '{dialect}'")
        return insert(Counter)

    def next_id(self, entity_type: str) -> int:
        """Increment and return the counter for ``entity_type``, creating it if absent"""
        stmt = self._insert().values(name=entity_type, seq=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"seq": Counter.seq + 1},
        ).returning(Counter.seq)
        try:
            value = self.db.execute(stmt).scalar_one()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Could not increment counter '{entity_type}': {str(e)}")
            raise StorageError("Error al generar el identificador") from e
        return value

    def current(self, entity_type: str) -> int:
        counter = self.db.get(Counter, entity_type)
        return counter.seq if counter else 0

    def sync(self, entity_type: str, floor: int) -> int:
        """Raise the counter to at least ``floor``; never lowers it"""
        stmt = self._insert().values(name=entity_type, seq=floor)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"seq": floor},
            where=Counter.seq < floor,
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Error al sincronizar los contadores") from e
        return self.current(entity_type)
