"""
Helpers shared by the HTTP-level tests.
"""

from fastapi.testclient import TestClient


def register(client: TestClient, email: str = "a@b.com", password: str = "secret1", **extra) -> dict:
    """Register through the API and return the response body."""
    resp = client.post("/api/auth/register", json={"email": email, "password": password, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
