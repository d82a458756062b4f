"""
Parameter-set helpers shared by the request models and the request builder.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Request parameters as sent on the wire: name -> rendered string value.
ParameterSet = dict[str, str]


def render_value(value: Any) -> str:
    """
    Renders a parameter value the way the service expects it.

    Booleans become "1"/"0", numbers become decimal strings, and datetimes become
    whole seconds since the epoch (naive datetimes are taken as UTC).
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(math.floor(value.timestamp()))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported parameter type: {type(value).__name__}")


def collect_params(**fields: Any) -> ParameterSet:
    """
    Builds a parameter set, leaving out every field whose value is None.

    This is the only place optional fields are decided: an absent field is omitted
    entirely, while an empty string is kept.
    """
    return {
        key: render_value(value) for key, value in fields.items() if value is not None
    }
