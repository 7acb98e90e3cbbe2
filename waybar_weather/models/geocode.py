"""Reverse geocoding result model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    address_found: bool = False
    latitude: float = 0.0
    longitude: float = 0.0
    display_name: str = ""
    country: str = ""
    state: str = ""
    municipality: str = ""
    city_district: str = ""
    postcode: str = ""
    city: str = ""
    suburb: str = ""
    street: str = ""
    house_number: str = ""
