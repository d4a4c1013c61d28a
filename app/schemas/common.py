import math
import re
from typing import Any, Optional

from pydantic_core import PydanticCustomError

# Error type used for messages that are returned to clients verbatim
REQUEST_FIELD_ERROR = "request_field"

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def request_error(message: str) -> PydanticCustomError:
    return PydanticCustomError(REQUEST_FIELD_ERROR, message)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_id(value: Any) -> Optional[int]:
    """Accept an int, a whole float or an integer string; anything else is not an identifier."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_RE.match(value):
        return int(value)
    return None


def describe_validation_errors(errors) -> str:
    """Reduce pydantic errors to the single message sent back to the client."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == REQUEST_FIELD_ERROR:
        return first["msg"]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    fields = [part for part in first.get("loc", ()) if isinstance(part, str) and part not in ("body", "query")]
    if first.get("type") == "missing" and not fields:
        return "Request body is required"
    if fields:
        return f"Invalid {fields[-1]} value"
    return "Invalid request body"
