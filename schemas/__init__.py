"""
Pydantic schemas for documents written to the store.

Schemas:
    location: LocationDocument and its nested Coordinates / Subdivisions

Usage:
    from schemas.location import LocationDocument, Coordinates

Example:
    doc = LocationDocument(
        place_id="ChIJ123",
        address="House 4, Road 7, Dhaka",
        coordinates=Coordinates(lat=23.8, long=90.4),
    )
    payload = doc.to_document()
"""

__all__ = [
    "LocationDocument",
    "Coordinates",
    "Subdivisions",
]
