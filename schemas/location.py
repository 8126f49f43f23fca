"""
Pydantic schemas for place documents
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

# width of the place_id key column in the collection table
MAX_PLACE_ID_LENGTH = 255


class Coordinates(BaseModel):
    """Latitude / longitude pair. Unparsable input is stored as 0.0."""

    lat: float = 0.0
    long: float = 0.0


class Subdivisions(BaseModel):
    """Administrative subdivisions of a place"""

    area: Optional[str] = None
    country: Optional[str] = None
    district: Optional[str] = None
    division: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class LocationDocument(BaseModel):
    """
    One place as stored in the collection.

    Workflow fields (suggesters, reviewers, is_merged, is_suggested,
    is_reviewed, correct_count) always start unset; they are owned by the
    review tooling once the document is in the store.
    """

    model_config = ConfigDict(frozen=True)

    place_id: str = Field(..., min_length=1, max_length=MAX_PLACE_ID_LENGTH)
    name: Optional[str] = None
    address: str = ""
    subdivisions: Subdivisions = Field(default_factory=Subdivisions)
    coordinates: Coordinates = Field(default_factory=Coordinates)
    types: List[str] = Field(default_factory=list)
    is_public: bool = False

    # Review workflow
    suggesters: List[Any] = Field(default_factory=list)
    reviewers: List[Any] = Field(default_factory=list)
    is_merged: bool = False
    is_suggested: bool = False
    is_reviewed: bool = False
    correct_count: int = 0

    @field_validator("place_id")
    @classmethod
    def clean_place_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("place_id cannot be empty after stripping")
        return v

    def to_document(self) -> Dict[str, Any]:
        """JSON-safe document payload"""
        return self.model_dump(mode="json")
