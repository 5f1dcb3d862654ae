from __future__ import annotations

"""Stdlib-only geohash codec.

Cells are strings over a 32-symbol alphabet; each character carries 5 bits,
interleaved longitude-first. A coordinate lying exactly on a bisecting
midpoint resolves to the lower half, so (0, 0) encodes to "7zzz..." rather
than the "s000..." produced by codecs that use ``>=``. Existing stored cells
depend on this, so keep the comparison strict.
"""

import math
from dataclasses import dataclass

_BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_DECODE_MAP = {c: i for i, c in enumerate(_BASE32)}

MIN_PRECISION = 1
MAX_PRECISION = 12
# ~19m x 19m cells.
DEFAULT_PRECISION = 8

EARTH_RADIUS_KM = 6371.0

# Approximate +/- error of a cell at each precision.
PRECISION_ERROR_KM: dict[int, float] = {
    1: 2500.0,
    2: 630.0,
    3: 78.0,
    4: 20.0,
    5: 2.4,
    6: 0.61,
    7: 0.076,
    8: 0.019,
    9: 0.0024,
    10: 0.0006,
    11: 0.000074,
    12: 0.000019,
}

# Approximate equatorial cell size, ordered coarse to fine.
_CELL_SIZE_KM: tuple[tuple[int, float], ...] = (
    (1, 5000.0),
    (2, 1250.0),
    (3, 156.0),
    (4, 39.0),
    (5, 4.9),
    (6, 1.2),
    (7, 0.15),
    (8, 0.038),
    (9, 0.0047),
    (10, 0.0012),
    (11, 0.00015),
    (12, 0.000037),
)


class GeohashError(ValueError):
    code = "GEOHASH_ERROR"


class InvalidLatitude(GeohashError):
    code = "INVALID_LATITUDE"


class InvalidLongitude(GeohashError):
    code = "INVALID_LONGITUDE"


class InvalidPrecision(GeohashError):
    code = "INVALID_PRECISION"


class EmptyInput(GeohashError):
    code = "EMPTY_INPUT"


class InvalidCharacter(GeohashError):
    code = "INVALID_CHARACTER"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def validate(self) -> None:
        # Written as "not within" so NaN is rejected too.
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidLatitude("latitude must be between -90 and 90")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidLongitude("longitude must be between -180 and 180")


def _check_precision(precision: int) -> None:
    # bool is an int subclass; a float would yield ceil(precision) characters.
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidPrecision(f"precision must be an integer, got {precision!r}")
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise InvalidPrecision(
            f"precision must be between {MIN_PRECISION} and {MAX_PRECISION}"
        )


def encode(latitude: float, longitude: float, *, precision: int = DEFAULT_PRECISION) -> str:
    Coordinate(latitude, longitude).validate()
    _check_precision(precision)

    lat_min, lat_max = -90.0, 90.0
    lon_min, lon_max = -180.0, 180.0

    even = True
    out: list[str] = []

    while len(out) < precision:
        ch = 0
        for _ in range(5):
            ch <<= 1
            if even:
                mid = (lon_min + lon_max) / 2.0
                if longitude > mid:
                    ch |= 1
                    lon_min = mid
                else:
                    lon_max = mid
            else:
                mid = (lat_min + lat_max) / 2.0
                if latitude > mid:
                    ch |= 1
                    lat_min = mid
                else:
                    lat_max = mid
            even = not even

        out.append(_BASE32[ch])

    return "".join(out)


def encode_default(latitude: float, longitude: float) -> str:
    return encode(latitude, longitude, precision=DEFAULT_PRECISION)


def decode_bbox(geohash: str) -> tuple[float, float, float, float]:
    """Return (lat_min, lat_max, lon_min, lon_max) for geohash."""

    if not geohash:
        raise EmptyInput("geohash must be non-empty")

    lat_min, lat_max = -90.0, 90.0
    lon_min, lon_max = -180.0, 180.0
    even = True

    for c in geohash:
        try:
            cd = _DECODE_MAP[c]
        except KeyError as e:
            raise InvalidCharacter(f"Invalid geohash character: {c!r}") from e

        for mask in (16, 8, 4, 2, 1):
            if even:
                mid = (lon_min + lon_max) / 2.0
                if cd & mask:
                    lon_min = mid
                else:
                    lon_max = mid
            else:
                mid = (lat_min + lat_max) / 2.0
                if cd & mask:
                    lat_min = mid
                else:
                    lat_max = mid
            even = not even

    return lat_min, lat_max, lon_min, lon_max


def decode_center(geohash: str) -> tuple[float, float]:
    lat_min, lat_max, lon_min, lon_max = decode_bbox(geohash)
    return (lat_min + lat_max) / 2.0, (lon_min + lon_max) / 2.0


def neighbors(geohash: str) -> list[str]:
    """Return the adjacent cells in N, S, E, W, NE, NW, SE, SW order.

    Directions that step past a pole or the antimeridian are dropped, so
    cells on the edge of the map have fewer than 8 neighbors.
    """

    lat_min, lat_max, lon_min, lon_max = decode_bbox(geohash)
    lat = (lat_min + lat_max) / 2.0
    lon = (lon_min + lon_max) / 2.0
    lat_step = lat_max - lat_min
    lon_step = lon_max - lon_min
    precision = len(geohash)

    offsets = (
        (1, 0),
        (-1, 0),
        (0, 1),
        (0, -1),
        (1, 1),
        (1, -1),
        (-1, 1),
        (-1, -1),
    )
    out: list[str] = []
    for d_lat, d_lon in offsets:
        try:
            out.append(
                encode(
                    lat + d_lat * lat_step,
                    lon + d_lon * lon_step,
                    precision=precision,
                )
            )
        except (InvalidLatitude, InvalidLongitude):
            continue
    return out


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(geohash_a: str, geohash_b: str) -> float:
    """Great-circle distance between the centers of two cells."""

    lat1, lon1 = decode_center(geohash_a)
    lat2, lon2 = decode_center(geohash_b)
    return haversine_km(lat1, lon1, lat2, lon2)


def precision_for_radius(radius_km: float) -> int:
    """Return the coarsest precision whose cell size fits within radius_km."""

    for precision, size_km in _CELL_SIZE_KM:
        if radius_km >= size_km:
            return precision
    return MAX_PRECISION


def precision_error_km(precision: int) -> float:
    _check_precision(precision)
    return PRECISION_ERROR_KM[precision]
