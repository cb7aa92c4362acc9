"""Input validation helpers shared by services and handlers."""

import re
from typing import Any, Iterable, Mapping, Optional

from utils.error_handling import ValidationError

_RECORD_REF_RE = re.compile(r"^[0-9a-f]{32}$")


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def first_present(*values: Optional[str]) -> Optional[str]:
    """Return the first non-blank value, or None."""
    for value in values:
        if not is_blank(value):
            return value
    return None


def ensure_present(value: Any, field: str) -> None:
    """Raise ValidationError if value is blank."""
    if is_blank(value) or value == []:
        raise ValidationError(f"{field} is required")


def ensure_all_present(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise one ValidationError naming every blank field."""
    missing = [field for field in fields if is_blank(payload.get(field))]
    if missing:
        raise ValidationError(f"Missing fields: {', '.join(missing)}")


def is_record_ref(value: Any) -> bool:
    """Record refs are UUID4 hex strings assigned by the store layer."""
    return isinstance(value, str) and bool(_RECORD_REF_RE.match(value))
