"""
Address-to-coordinate resolution.

Geocoding is an external capability: the job model only records whatever
coordinates it is handed. ``FixedGeocoder`` resolves every address to one
configured point and is what the tools use until a real provider is wired in.
"""

from typing import Optional, Protocol, Tuple

from config import get_config


class Geocoder(Protocol):
    """Anything that can turn a street address into ``(lat, lng)``."""

    def geocode(self, address: str) -> Tuple[float, float]:
        ...


class FixedGeocoder:
    """Geocoder that returns the same coordinates for every address."""

    def __init__(self, lat: Optional[float] = None, lng: Optional[float] = None):
        config = get_config()
        self.lat = config.default_lat if lat is None else lat
        self.lng = config.default_lng if lng is None else lng

    def geocode(self, address: str) -> Tuple[float, float]:
        return self.lat, self.lng
