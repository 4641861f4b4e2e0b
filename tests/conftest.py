import pytest

from hamcall.adapters.callsign import CallsignParser
from hamcall.adapters.entities import EntityTable, load_entity_table


@pytest.fixture(scope="session")
def entities() -> EntityTable:
    return load_entity_table()


@pytest.fixture(scope="session")
def parser(entities: EntityTable) -> CallsignParser:
    return CallsignParser(entities)


@pytest.fixture
def bare_parser() -> CallsignParser:
    """Parser with an empty entity table."""
    return CallsignParser(EntityTable())


def dump(record) -> dict:
    return record.model_dump(exclude_none=True)
