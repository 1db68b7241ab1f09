"""
GeoCat: a location-tagged cat registry.

Geolocated cats owned by users, exposed through a FastAPI service with
owner/admin authorization and bounding-box area queries.
"""

__version__ = "0.1.0"
