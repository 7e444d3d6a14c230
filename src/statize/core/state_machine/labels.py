"""Canonical label handling for states, events, meanings and profiles."""

from enum import Enum
from typing import Any, Optional

Label = str

DEFAULT_PROFILE: Label = "default"


def normalize_label(value: Any) -> Label:
    """
    Convert a user supplied label into its canonical string form.

    String-valued enum members normalise to their value, other enum members
    to their name, so ``Status.OPEN`` and ``"open"`` name the same state when
    ``Status.OPEN.value == "open"``.

    Raises:
        TypeError: If the value is neither a string nor an enum member
    """
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name
    if isinstance(value, str):
        return value
    raise TypeError(
        f"Labels must be str or Enum members, got {type(value).__name__}: {value!r}"
    )


def coerce_label(value: Any) -> Optional[Label]:
    """Like normalize_label, but returns None for values that are not labels."""
    try:
        return normalize_label(value)
    except TypeError:
        return None
