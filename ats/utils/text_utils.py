"""Display helpers for enum-backed fields."""

from enum import Enum
from typing import Any


def display_value(value: Any) -> Any:
    """Plain value of an enum member; anything else unchanged.

    Models keep enum values as plain strings once validated, but fields set
    by assignment still hold the member.
    """
    if isinstance(value, Enum):
        return value.value
    return value
