"""Request objects, response parsers and helpers for geocoding, geolocation and places services."""

__version__ = "0.1.0"