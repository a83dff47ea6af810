"""
Place name -> coordinates lookup

Resolves the free-text "place" a guest types on the destinations page into
a latitude/longitude pair through a Nominatim-compatible /search endpoint.

NOTE:
Nominatim usage policy requires a valid User-Agent with contact info and
reasonable rate limits. In production, consider running your own instance.
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from ..config import GEOCODING_TIMEOUT_SECONDS, NOMINATIM_BASE_URL, NOMINATIM_USER_AGENT

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """The geocoding provider failed or returned something unusable"""


class GeocodedPlace(BaseModel):
    display_name: str
    latitude: float
    longitude: float
    country_code: Optional[str] = None


class NominatimGeocoder:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = NOMINATIM_USER_AGENT,
        timeout: float = GEOCODING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport

    async def geocode(self, place: str) -> Optional[GeocodedPlace]:
        """Best match for `place`, or None when the provider knows nothing about it"""
        place = (place or "").strip()
        if not place:
            return None

        params = {"q": place, "format": "json", "addressdetails": 1, "limit": "1"}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(f"{self.base_url}/search", params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"❌ Geocoding request failed for '{place}': {e}")
            raise GeocodingError("Geocoding provider unavailable") from e

        if resp.status_code >= 400:
            logger.warning(f"Nominatim error {resp.status_code}: {resp.text[:200]}")
            raise GeocodingError("Geocoding provider error")

        try:
            raw = resp.json()
        except ValueError as e:
            raise GeocodingError("Geocoding provider returned invalid JSON") from e

        if not isinstance(raw, list):
            logger.warning(f"Nominatim returned a non-list payload for '{place}': {str(raw)[:200]}")
            raise GeocodingError("Geocoding provider returned an unexpected payload")

        if not raw:
            logger.info(f"🔍 No geocoding match for '{place}'")
            return None

        try:
            item = raw[0]
            return GeocodedPlace(
                display_name=item.get("display_name") or place,
                latitude=float(item["lat"]),
                longitude=float(item["lon"]),
                country_code=(item.get("address") or {}).get("country_code", "").upper() or None,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GeocodingError("Geocoding provider returned an unexpected payload") from e


def get_geocoder() -> NominatimGeocoder:
    """Dependency injection for the geocoder"""
    return NominatimGeocoder()
