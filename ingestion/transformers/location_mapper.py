"""
Map raw CSV rows onto place documents
"""

from typing import Any, List, Optional
from pydantic import ValidationError
from core.exceptions import SchemaMismatchError, TransformationError
from ingestion.extractors.csv_extractor import RawRecord
from schemas.location import MAX_PLACE_ID_LENGTH, Coordinates, LocationDocument, Subdivisions
import logging

logger = logging.getLogger(__name__)


# Positional column layout of the input file
PLACE_ID = 0
NAME = 1
ADDRESS = 2
AREA = 3
COUNTRY = 4
DISTRICT = 5
DIVISION = 6
IS_PUBLIC = 7
TYPES = 8
LATITUDE = 9
LONGITUDE = 10

REQUIRED_COLUMNS = LONGITUDE + 1

_TRUE_VALUES = {"true"}


class LocationMapper:
    """
    Convert one raw row into one LocationDocument.

    Handles:
    - Natural key extraction
    - Bracketed list columns
    - Coordinate coercion (0.0 on bad input)
    - Boolean coercion
    - Optional region predicate on the country column
    """

    def __init__(self, region: Optional[str] = None):
        self.region = region

    def map(self, record: RawRecord) -> Optional[LocationDocument]:
        """
        Map a row, or return None if the region predicate rejects it.

        Raises:
            SchemaMismatchError: Row has fewer columns than the layout needs
            TransformationError: Row has a blank or over-long place_id
        """
        if len(record) < REQUIRED_COLUMNS:
            raise SchemaMismatchError(
                f"Row has {len(record)} columns, expected at least {REQUIRED_COLUMNS}",
                context={
                    "place_id": record[PLACE_ID] if record else None,
                    "columns": len(record),
                    "required": REQUIRED_COLUMNS
                }
            )

        if self.region is not None and record[COUNTRY] != self.region:
            return None

        place_id = record[PLACE_ID].strip()
        if not place_id:
            raise TransformationError(
                "Row has an empty place_id",
                context={"address": record[ADDRESS]}
            )

        try:
            return LocationDocument(
                place_id=place_id,
                name=record[NAME].strip() or None,
                address=record[ADDRESS],
                subdivisions=Subdivisions(
                    area=record[AREA],
                    country=record[COUNTRY],
                    district=record[DISTRICT],
                    division=record[DIVISION],
                ),
                coordinates=Coordinates(
                    lat=parse_float(record[LATITUDE]),
                    long=parse_float(record[LONGITUDE]),
                ),
                types=parse_list(record[TYPES]),
                is_public=parse_bool(record[IS_PUBLIC]),
            )
        except ValidationError as e:
            raise TransformationError(
                "Row does not form a valid place document",
                context={
                    "place_id": place_id[:MAX_PLACE_ID_LENGTH],
                    "fields": sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()}),
                },
                original_exception=e
            )


def parse_float(value: Any) -> float:
    """Parse a float, falling back to 0.0"""
    if value is None:
        return 0.0
    try:
        parsed = float(str(value).strip())
    except (ValueError, TypeError):
        return 0.0
    # nan/inf are not valid JSON
    if parsed != parsed or parsed in (float("inf"), float("-inf")):
        return 0.0
    return parsed


def parse_bool(value: Any) -> bool:
    """Case-insensitive "true" check; anything else is False"""
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def parse_list(value: Any) -> List[str]:
    """
    Parse a bracketed list such as "['cafe', 'food']".

    Brackets and quotes are optional; empty items are dropped.
    """
    if value is None:
        return []
    text = str(value).strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    items = []
    for item in text.split(","):
        item = item.strip().strip("'\"").strip()
        if item:
            items.append(item)
    return items
