from concurrent.futures import ThreadPoolExecutor

from sqlalchemy.orm import sessionmaker

from iot_monitor.database import Base, make_engine
from iot_monitor.init_db import sync_counters
from iot_monitor.models.zone import Zone
from iot_monitor.services.sequence import SequenceGenerator, SENSORS, USERS, ZONES


def test_first_id_is_one_and_counters_are_independent(db):
    sequences = SequenceGenerator(db)
    assert sequences.current(USERS) == 0
    assert sequences.next_id(USERS) == 1
    assert sequences.next_id(USERS) == 2
    assert sequences.next_id(ZONES) == 1
    assert sequences.current(USERS) == 2


def test_sync_raises_but_never_lowers(db):
    sequences = SequenceGenerator(db)
    assert sequences.sync(SENSORS, 5) == 5
    assert sequences.next_id(SENSORS) == 6
    assert sequences.sync(SENSORS, 2) == 6
    assert sequences.next_id(SENSORS) == 7


def test_sync_counters_follows_existing_records(db):
    db.add(Zone(id_zone=41, name="Importada"))
    db.commit()

    counters = sync_counters(db)

    assert counters[ZONES] == 41
    assert counters[USERS] == 0
    assert SequenceGenerator(db).next_id(ZONES) == 42


def test_concurrent_next_id_never_repeats(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'counters.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def issue(_):
        session = factory()
        try:
            return [SequenceGenerator(session).next_id(SENSORS) for _ in range(5)]
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = list(pool.map(issue, range(8)))

    issued = [value for batch in batches for value in batch]
    assert sorted(issued) == list(range(1, 41))
    for batch in batches:
        assert batch == sorted(batch)
    engine.dispose()
