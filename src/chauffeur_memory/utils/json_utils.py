"""
JSON helpers for LLM responses.
"""

import json
from typing import Any


def clean_json_response(response: str) -> str:
    """Strip markdown code fences that some models wrap around JSON output.

    Args:
        response: Raw completion text

    Returns:
        The JSON text without ```json / ``` markers
    """
    response = response.strip()

    if response.startswith("```json"):
        response = response[7:]
    elif response.startswith("```"):
        response = response[3:]

    if response.endswith("```"):
        response = response[:-3]

    return response.strip()


def parse_json_response(response: str) -> Any:
    """Parse a completion as JSON. Raises json.JSONDecodeError on malformed output."""
    return json.loads(clean_json_response(response or ""))
