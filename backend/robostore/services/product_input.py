import json
from collections.abc import Mapping

from robostore.core.errors import MalformedInputError


def parse_features(value) -> list[str] | None:
    """
    Accepts a list of strings or one comma-separated string.
    Returns trimmed, non-blank entries in order, or None when nothing was supplied.
    """
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise MalformedInputError("Features must be a list of strings or a comma-separated string")

    features = []
    for item in items:
        if not isinstance(item, str):
            raise MalformedInputError("Features must be a list of strings or a comma-separated string")
        item = item.strip()
        if item:
            features.append(item)
    return features


def parse_specifications(value) -> dict | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Specifications is not valid JSON: {e.msg}") from e
        if not isinstance(decoded, dict):
            raise MalformedInputError("Specifications must be a JSON object")
        return decoded
    raise MalformedInputError("Specifications must be an object or a JSON string")


def parse_stock(value):
    # a blank form field means "not stocked yet"
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value
