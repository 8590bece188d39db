"""Tests for the geocoding client and image storage."""
from __future__ import annotations

import os

import pytest
import requests

from civic_reports.core.config import Settings
from civic_reports.core.errors import UpstreamError, ValidationError
from civic_reports.core.identity import resolve_device_id
from civic_reports.services import geocoding, storage
from civic_reports.services.geocoding import Geocoder
from civic_reports.services.storage import ImageStorage, make_object_key


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


@pytest.fixture
def geocoder():
    return Geocoder("https://geo.example.com/search", "civic-reports-tests", timeout=2)


def test_geocoder_parses_first_match(monkeypatch, geocoder):
    seen = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        seen.update(url=url, params=params, headers=headers, timeout=timeout)
        return FakeResponse([{"lat": "40.7128", "lon": "-74.0060"}, {"lat": "0", "lon": "0"}])

    monkeypatch.setattr(geocoding.requests, "get", fake_get)
    assert geocoder.lookup("New York") == (40.7128, -74.006)
    assert seen["params"]["q"] == "New York"
    assert seen["headers"]["User-Agent"] == "civic-reports-tests"
    assert seen["timeout"] == 2


@pytest.mark.parametrize("response", [
    FakeResponse([]),
    FakeResponse(status_code=503),
    FakeResponse(ValueError("not json")),
    FakeResponse([{"display_name": "no coords"}]),
])
def test_geocoder_degrades_to_none(monkeypatch, geocoder, response):
    monkeypatch.setattr(geocoding.requests, "get", lambda *a, **kw: response)
    assert geocoder.lookup("Main St") is None


def test_geocoder_timeout_is_none(monkeypatch, geocoder):
    def boom(*a, **kw):
        raise requests.Timeout("slow")

    monkeypatch.setattr(geocoding.requests, "get", boom)
    assert geocoder.lookup("Main St") is None


def test_geocoder_blank_address_skips_request(monkeypatch, geocoder):
    def fail(*a, **kw):
        raise AssertionError("should not be called")

    monkeypatch.setattr(geocoding.requests, "get", fail)
    assert geocoder.lookup("   ") is None


def test_geocoder_disabled_by_settings():
    assert Geocoder.from_settings(Settings(GEOCODING_ENABLED=False)) is None
    assert isinstance(Geocoder.from_settings(Settings(GEOCODING_ENABLED=True)), Geocoder)


def test_local_storage_writes_file(tmp_path):
    store = ImageStorage(Settings(UPLOAD_DIR=str(tmp_path)))
    url = store.save(b"img", "image/jpeg", "photo.JPG", base_url="http://api.local/")
    assert url.startswith("http://api.local/uploads/")
    assert url.endswith(".jpg")
    assert (tmp_path / url.rsplit("/", 1)[-1]).read_bytes() == b"img"


def test_storage_limits(tmp_path):
    store = ImageStorage(Settings(UPLOAD_DIR=str(tmp_path), MAX_IMAGE_BYTES=4))
    with pytest.raises(ValidationError):
        store.save(b"", "image/png", "a.png")
    with pytest.raises(ValidationError):
        store.save(b"abc", "application/pdf", "a.pdf")
    with pytest.raises(ValidationError):
        store.save(b"too big", "image/png", "a.png")
    assert os.listdir(tmp_path) == []


def test_supabase_upload(monkeypatch, tmp_path):
    calls = []

    def fake_post(url, headers=None, data=None, timeout=None):
        calls.append((url, headers, data))
        return FakeResponse({})

    monkeypatch.setattr(storage.requests, "post", fake_post)
    store = ImageStorage(Settings(
        UPLOAD_DIR=str(tmp_path),
        SUPABASE_URL="https://proj.supabase.co",
        SUPABASE_SERVICE_ROLE="secret",
        SUPABASE_BUCKET="photos",
    ))
    url = store.save(b"img", "image/png", "a.png")
    assert url.startswith("https://proj.supabase.co/storage/v1/object/public/photos/")
    assert calls[0][0].startswith("https://proj.supabase.co/storage/v1/object/photos/")
    assert calls[0][1]["Authorization"] == "Bearer secret"
    assert os.listdir(tmp_path) == []


def test_supabase_failure_is_upstream_error(monkeypatch, tmp_path):
    monkeypatch.setattr(storage.requests, "post", lambda *a, **kw: FakeResponse(status_code=500))
    store = ImageStorage(Settings(
        UPLOAD_DIR=str(tmp_path), SUPABASE_URL="https://proj.supabase.co", SUPABASE_SERVICE_ROLE="k",
    ))
    with pytest.raises(UpstreamError):
        store.save(b"img", "image/png", "a.png")


def test_object_key_keeps_extension():
    assert make_object_key("IMG_001.PNG").endswith(".png")
    assert make_object_key("blob").endswith(".jpg")


def test_resolve_device_id():
    assert resolve_device_id(None, "  ", " D1 ", "D2") == "D1"
    assert resolve_device_id(None, "") is None
