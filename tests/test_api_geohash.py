from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from geocell.services.encode_cache import get_encode_cache


def test_healthz(client: TestClient) -> None:
    r = client.get("/healthz")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ok"}


def test_encode_uses_default_precision(client: TestClient) -> None:
    r = client.get(
        "/v1/geohash/encode",
        params={"latitude": 48.1351, "longitude": 11.5820},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["precision"] == 8
    assert len(body["geohash"]) == 8
    assert body["geohash"].startswith("u281z")
    assert r.headers.get("X-Trace-Id")


def test_encode_goes_through_cache(client: TestClient) -> None:
    params = {"latitude": 31.2304, "longitude": 121.4737, "precision": 5}
    for _ in range(3):
        r = client.get("/v1/geohash/encode", params=params)
        assert r.status_code == 200, r.text

    stats = get_encode_cache().stats()
    assert stats.misses == 1
    assert stats.hits == 2


@pytest.mark.parametrize(
    ("params", "code"),
    [
        ({"latitude": 90.0001, "longitude": 0.0}, "INVALID_LATITUDE"),
        ({"latitude": 0.0, "longitude": -180.5}, "INVALID_LONGITUDE"),
        ({"latitude": 0.0, "longitude": 0.0, "precision": 0}, "INVALID_PRECISION"),
        ({"latitude": 0.0, "longitude": 0.0, "precision": 13}, "INVALID_PRECISION"),
    ],
)
def test_encode_validation_errors(
    client: TestClient, params: dict[str, object], code: str
) -> None:
    r = client.get(
        "/v1/geohash/encode",
        params=params,
        headers={"X-Trace-Id": "trace-123"},
    )
    assert r.status_code == 400, r.text
    body = r.json()
    assert body["code"] == code
    assert body["trace_id"] == "trace-123"
    assert r.headers["X-Trace-Id"] == "trace-123"


def test_encode_missing_param_is_422(client: TestClient) -> None:
    r = client.get("/v1/geohash/encode", params={"latitude": 1.0})
    assert r.status_code == 422, r.text
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_decode_and_bbox(client: TestClient) -> None:
    r = client.get("/v1/geohash/s/decode")
    assert r.status_code == 200, r.text
    assert r.json() == {"geohash": "s", "latitude": 22.5, "longitude": 22.5}

    r = client.get("/v1/geohash/7/bbox")
    assert r.status_code == 200, r.text
    assert r.json() == {
        "geohash": "7",
        "min_lat": -45.0,
        "max_lat": 0.0,
        "min_lon": -45.0,
        "max_lon": 0.0,
    }


def test_decode_invalid_character(client: TestClient) -> None:
    r = client.get("/v1/geohash/u2a1/decode")
    assert r.status_code == 400, r.text
    assert r.json()["code"] == "INVALID_CHARACTER"


def test_neighbors(client: TestClient) -> None:
    r = client.get("/v1/geohash/b/neighbors")
    assert r.status_code == 200, r.text
    assert r.json() == {"geohash": "b", "neighbors": ["8", "c", "9"]}


def test_distance(client: TestClient) -> None:
    r = client.get("/v1/geohash/distance", params={"a": "u281z7j5", "b": "u33db3gz"})
    assert r.status_code == 200, r.text
    assert r.json()["distance_km"] == pytest.approx(504.0, abs=10.0)


def test_distance_invalid_cell(client: TestClient) -> None:
    r = client.get("/v1/geohash/distance", params={"a": "", "b": "u33db3gz"})
    assert r.status_code == 400, r.text
    assert r.json()["code"] == "EMPTY_INPUT"


def test_precision_for_radius(client: TestClient) -> None:
    r = client.get("/v1/geohash/precision", params={"radius_km": 100})
    assert r.status_code == 200, r.text
    assert r.json() == {"radius_km": 100.0, "precision": 4, "error_km": 20.0}

    r = client.get("/v1/geohash/precision", params={"radius_km": -1})
    assert r.status_code == 400, r.text
    assert r.json()["code"] == "INVALID_RADIUS"


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    r = client.get("/v1/nope")
    assert r.status_code == 404, r.text
    assert r.json()["code"] == "HTTP_ERROR"


def test_distance_antipodal_cells(client: TestClient) -> None:
    r = client.get("/v1/geohash/distance", params={"a": "9j2", "b": "m48"})
    assert r.status_code == 200, r.text
    assert r.json()["distance_km"] == pytest.approx(20015.0, abs=50.0)


@pytest.mark.parametrize("radius", ["nan", "inf", "-inf"])
def test_precision_rejects_non_finite_radius(client: TestClient, radius: str) -> None:
    r = client.get("/v1/geohash/precision", params={"radius_km": radius})
    assert r.status_code == 400, r.text
    assert r.json()["code"] == "INVALID_RADIUS"
