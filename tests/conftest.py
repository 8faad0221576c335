import pytest
from fastapi.testclient import TestClient

from DB import Store
from Host import create_app


@pytest.fixture
def store(tmp_path):
    s = Store(str(tmp_path / "db" / "greenhouse.db"))
    return s


@pytest.fixture
def client(store):
    # entering the client runs the lifespan, which initialises the store
    with TestClient(create_app(store)) as c:
        yield c
