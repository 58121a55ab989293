import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope='module')
def client() -> TestClient:
    from crm.network.http.server import server

    with TestClient(server) as c:
        yield c


@pytest.fixture(scope='function')
def lenient_client() -> TestClient:
    """
    Returns 500 responses instead of re-raising server exceptions
    """
    from crm.network.http.server import server

    with TestClient(server, raise_server_exceptions=False) as c:
        yield c
