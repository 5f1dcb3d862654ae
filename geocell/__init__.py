"""geocell - geohash spatial-cell codec and lookup API.

Layout::

    utils/geohash.py           encode / decode / bbox / neighbors / distance
    services/encode_cache.py   thread-safe memoizing encoder
    api/                       FastAPI routers over the codec
    core/                      settings, error envelope, logging
"""

__version__ = "0.1.0"

from geocell.utils.geohash import (
    DEFAULT_PRECISION,
    Coordinate,
    EmptyInput,
    GeohashError,
    InvalidCharacter,
    InvalidLatitude,
    InvalidLongitude,
    InvalidPrecision,
    decode_bbox,
    decode_center,
    distance_km,
    encode,
    encode_default,
    haversine_km,
    neighbors,
    precision_for_radius,
)

__all__ = [
    "DEFAULT_PRECISION",
    "Coordinate",
    "EmptyInput",
    "GeohashError",
    "InvalidCharacter",
    "InvalidLatitude",
    "InvalidLongitude",
    "InvalidPrecision",
    "__version__",
    "decode_bbox",
    "decode_center",
    "distance_km",
    "encode",
    "encode_default",
    "haversine_km",
    "neighbors",
    "precision_for_radius",
]
