"""Utility functions shared across the memory engine."""

from chauffeur_memory.utils.json_utils import clean_json_response, parse_json_response
from chauffeur_memory.utils.time import format_date, utcnow

__all__ = [
    "clean_json_response",
    "parse_json_response",
    "format_date",
    "utcnow",
]
