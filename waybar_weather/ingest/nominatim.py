"""Reverse geocoding via OSM Nominatim, with a quantized TTL cache."""

import logging
from time import monotonic
from typing import Protocol

import httpx

from waybar_weather.errors import GeocodeError
from waybar_weather.models.common import Coordinate
from waybar_weather.models.geocode import Address

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_USER_AGENT = "waybar-weather/0.1.0"
DEFAULT_TIMEOUT = 10.0

CACHE_HIT_TTL = 3600.0
CACHE_MISS_TTL = 600.0
# 0.01 degrees is roughly 1.1 km
COORD_PRECISION = 1e-2


class Geocoder(Protocol):
    def name(self) -> str: ...

    async def reverse(self, coords: Coordinate) -> Address: ...


class NominatimGeocoder:
    def __init__(
        self,
        language: str = "en",
        base_url: str = NOMINATIM_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.language = language
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = client

    def name(self) -> str:
        return "osm-nominatim"

    async def reverse(self, coords: Coordinate) -> Address:
        params = {
            "format": "jsonv2",
            "lat": f"{coords.lat:f}",
            "lon": f"{coords.lon:f}",
            "accept-language": self.language,
        }
        headers = {"User-Agent": self.user_agent}
        try:
            if self._client is not None:
                resp = await self._client.get(
                    self.base_url, params=params, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(self.base_url, params=params, headers=headers)
        except httpx.RequestError as e:
            raise GeocodeError(f"Nominatim request failed: {e}") from e

        if resp.status_code != 200:
            raise GeocodeError(f"Nominatim returned HTTP {resp.status_code}", resp.status_code)
        try:
            result = resp.json()
        except ValueError as e:
            raise GeocodeError(f"invalid Nominatim response: {e}") from e
        return _address_from_result(result)


def _address_from_result(result: dict) -> Address:
    if "error" in result:
        # Nominatim answers 200 with an error object for unknown places
        return Address()

    addr = result.get("address", {})
    city = addr.get("city") or addr.get("town") or addr.get("village") or ""
    try:
        lat = float(result.get("lat", 0))
        lon = float(result.get("lon", 0))
    except (TypeError, ValueError) as e:
        raise GeocodeError(f"invalid coordinates in Nominatim response: {e}") from e

    return Address(
        address_found=True,
        latitude=lat,
        longitude=lon,
        display_name=result.get("display_name", ""),
        country=addr.get("country", ""),
        state=addr.get("state", ""),
        municipality=addr.get("municipality", ""),
        city_district=addr.get("city_district", ""),
        postcode=addr.get("postcode", ""),
        city=city,
        suburb=addr.get("suburb", ""),
        street=addr.get("road", ""),
        house_number=addr.get("house_number", ""),
    )


class CachedGeocoder:
    """Caches reverse lookups by provider and quantized coordinates.

    Found addresses live for `ttl_hit`, misses for `ttl_miss` seconds.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        ttl_hit: float = CACHE_HIT_TTL,
        ttl_miss: float = CACHE_MISS_TTL,
    ):
        self.geocoder = geocoder
        self.ttl_hit = ttl_hit
        self.ttl_miss = ttl_miss
        self._cache: dict[tuple[str, int, int], tuple[Address, float]] = {}

    def name(self) -> str:
        return f"geocoder cache using {self.geocoder.name()}"

    async def reverse(self, coords: Coordinate) -> Address:
        key = (
            self.geocoder.name(),
            _quantize(coords.lat),
            _quantize(coords.lon),
        )
        entry = self._cache.get(key)
        if entry is not None and monotonic() < entry[1]:
            logger.debug("Geocoder cache hit for %s", key)
            return entry[0]

        address = await self.geocoder.reverse(coords)
        ttl = self.ttl_hit if address.address_found else self.ttl_miss
        self._cache[key] = (address, monotonic() + ttl)
        return address

    def clear_cache(self) -> None:
        self._cache.clear()


def _quantize(value: float) -> int:
    return round(value / COORD_PRECISION)
