"""
JSON encoder/decoder for the text-frame wire format.

Every frame carries exactly one JSON object.
"""

import json
from typing import Any

# Size limit to prevent resource exhaustion from oversized frames.
MAX_PAYLOAD_LEN = 64 * 1024


class DecodeError(Exception):
    """Error raised when an inbound frame cannot be decoded."""


def encode(data: dict[str, Any]) -> str:
    """
    Encode a dict to a compact JSON string.
    """
    return json.dumps(data, separators=(",", ":"))


def decode(data: str | bytes) -> dict[str, Any]:
    """
    Decode a JSON text frame to a dict.

    Raises DecodeError if data is invalid, not an object, or exceeds the size limit.
    """
    if len(data) > MAX_PAYLOAD_LEN:
        raise DecodeError(f"payload too large: {len(data)} bytes (max {MAX_PAYLOAD_LEN})")
    try:
        result = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"failed to decode JSON data: {e}") from e
    except RecursionError:
        raise DecodeError("payload nested too deeply") from None

    if not isinstance(result, dict):
        raise DecodeError(f"expected object, got {type(result).__name__}")

    return result
