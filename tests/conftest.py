from datetime import datetime, timezone

import pytest

from loci.storage import LocationRepository, get_engine, init_db, make_session_factory
from loci.supermemo import ReviewableItem


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def engine():
    engine = get_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repo(engine):
    return LocationRepository(make_session_factory(engine))


@pytest.fixture
def make_item():
    def _make(item_id, sequence=0, scope_id="palace", next_review=NOW, **state):
        return ReviewableItem(
            item_id=item_id,
            sequence=sequence,
            scope_id=scope_id,
            next_review=next_review,
            **state,
        )
    return _make
