# tests/test_health.py
from fastapi import status


def test_root_responds(client) -> None:
    """Verify that the root endpoint reports the service is up."""
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["message"] == "Blogging Platform API is running!"


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_is_404(client) -> None:
    assert client.get("/no/such/route").status_code == status.HTTP_404_NOT_FOUND
