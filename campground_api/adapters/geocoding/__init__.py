from .mapbox import MapboxGeocoder

__all__ = ["MapboxGeocoder"]
