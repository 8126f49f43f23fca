from ingestion.transformers.location_mapper import (
    LocationMapper,
    parse_bool,
    parse_float,
    parse_list,
)

__all__ = ["LocationMapper", "parse_bool", "parse_float", "parse_list"]
