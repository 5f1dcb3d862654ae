from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from geocell.core.errors import APIError, api_error_from_geohash
from geocell.core.settings import Settings, get_settings
from geocell.services.encode_cache import EncodeCache, get_encode_cache
from geocell.utils.geohash import (
    GeohashError,
    decode_bbox,
    decode_center,
    distance_km,
    neighbors,
    precision_error_km,
    precision_for_radius,
)


router = APIRouter(prefix="/v1/geohash", tags=["geohash"])


class EncodeResponse(BaseModel):
    geohash: str
    precision: int


class DecodeResponse(BaseModel):
    geohash: str
    latitude: float
    longitude: float


class BBoxResponse(BaseModel):
    geohash: str
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class NeighborsResponse(BaseModel):
    geohash: str
    neighbors: list[str]


class DistanceResponse(BaseModel):
    a: str
    b: str
    distance_km: float


class PrecisionResponse(BaseModel):
    radius_km: float
    precision: int
    error_km: float


@router.get("/encode", response_model=EncodeResponse)
def encode_point(
    latitude: float = Query(...),
    longitude: float = Query(...),
    precision: int | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    cache: EncodeCache = Depends(get_encode_cache),
) -> EncodeResponse:
    # Range checks are left to the codec so errors carry its codes.
    p = precision if precision is not None else int(settings.default_precision)
    try:
        geohash = cache.encode(latitude, longitude, precision=p)
    except GeohashError as e:
        raise api_error_from_geohash(e) from e
    return EncodeResponse(geohash=geohash, precision=p)


@router.get("/distance", response_model=DistanceResponse)
def distance(a: str = Query(...), b: str = Query(...)) -> DistanceResponse:
    try:
        km = distance_km(a, b)
    except GeohashError as e:
        raise api_error_from_geohash(e) from e
    return DistanceResponse(a=a, b=b, distance_km=km)


@router.get("/precision", response_model=PrecisionResponse)
def precision_for(radius_km: float = Query(...)) -> PrecisionResponse:
    if not math.isfinite(radius_km) or radius_km < 0:
        raise APIError(
            code="INVALID_RADIUS",
            message="radius_km must be a finite number >= 0",
            status_code=400,
        )
    p = precision_for_radius(radius_km)
    return PrecisionResponse(
        radius_km=radius_km,
        precision=p,
        error_km=precision_error_km(p),
    )


@router.get("/{geohash}/decode", response_model=DecodeResponse)
def decode(geohash: str) -> DecodeResponse:
    try:
        lat, lon = decode_center(geohash)
    except GeohashError as e:
        raise api_error_from_geohash(e) from e
    return DecodeResponse(geohash=geohash, latitude=lat, longitude=lon)


@router.get("/{geohash}/bbox", response_model=BBoxResponse)
def bbox(geohash: str) -> BBoxResponse:
    try:
        min_lat, max_lat, min_lon, max_lon = decode_bbox(geohash)
    except GeohashError as e:
        raise api_error_from_geohash(e) from e
    return BBoxResponse(
        geohash=geohash,
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
    )


@router.get("/{geohash}/neighbors", response_model=NeighborsResponse)
def adjacent(geohash: str) -> NeighborsResponse:
    try:
        cells = neighbors(geohash)
    except GeohashError as e:
        raise api_error_from_geohash(e) from e
    return NeighborsResponse(geohash=geohash, neighbors=cells)
