"""Shared fixtures: a fresh in-memory store per test, uploads in tmp_path."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from civic_reports.core.config import Settings
from civic_reports.db.session import Database
from civic_reports.main import create_app

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeGeocoder:
    """Stands in for Nominatim. ``result`` may be coordinates, None, or an exception to raise."""

    def __init__(self, result=(51.5072, -0.1276)):
        self.result = result
        self.calls: list[str] = []

    def lookup(self, address):
        self.calls.append(address)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        PUBLIC_BASE_URL="http://testserver",
        GEOCODING_ENABLED=False,
        RATE_LIMIT_ENABLED=False,
    )


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def app(settings, geocoder):
    application = create_app(settings)
    application.state.geocoder = geocoder
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    """Service-level session on its own in-memory store."""
    database = Database("sqlite://")
    database.create_all()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.dispose()


@pytest.fixture
def submit(client):
    """POST /reports as the mobile app does: multipart form with an image."""
    def _submit(caption="pothole", address="Main St", device_id="D1", mirror=False, image=PNG, **extra):
        data = {
            "caption": caption,
            "address": address,
            "deviceId": device_id,
            "userId": device_id,
            "postToCommunity": "true" if mirror else "false",
        }
        data.update(extra)
        files = {"image": ("photo.png", image, "image/png")} if image is not None else None
        return client.post("/reports", data=data, files=files)
    return _submit


@pytest.fixture
def post_id(client):
    resp = client.post("/community", json={
        "caption": "Broken streetlight",
        "address": "Elm St",
        "userId": "D1",
        "imageUrl": "http://cdn.example.com/light.jpg",
    })
    assert resp.status_code == 201
    return resp.json()["id"]
