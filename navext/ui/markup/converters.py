"""
Coercion of markup attribute values.

Markup hands attribute values over as strings; these helpers turn them
into the typed values extension properties hold and reject anything
they do not recognise.
"""
from typing import Any, Optional

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}
_NONE = {"", "none", "null"}


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"'{value}' is not a boolean")
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"{value!r} is not a boolean")


def to_optional_bool(value: Any) -> Optional[bool]:
    """Tri-state: None (unset), True or False."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in _NONE:
        return None
    return to_bool(value)


def to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def parse_enum(enum_cls, value: Any):
    """
    Accept an enum member, its name in any case (``"ToRoot"``, ``"TO_ROOT"``)
    or its value.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().replace("_", "").lower()
        for member in enum_cls:
            if member.name.replace("_", "").lower() == key:
                return member
    else:
        try:
            return enum_cls(value)
        except ValueError:
            pass
    choices = ", ".join(member.name for member in enum_cls)
    raise ValueError(f"'{value}' is not a valid {enum_cls.__name__} (expected one of: {choices})")
