# app/core/utils.py

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, List

from app.core.exceptions import NotFoundError


def to_uuid(value: Any, label: str = "Resource") -> uuid.UUID:
    """
    Path/body ids arrive as strings. An id that is not a UUID cannot match
    any row, so it is reported the same way as a missing row.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise NotFoundError(f"{label} not found")


def split_list(value: Any) -> List[str]:
    """Accepts a list or a comma separated string (form posts send the latter)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Iterable):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


def utc_now() -> datetime:
    """Timezone-aware UTC now; every timestamp column stores aware values."""
    return datetime.now(timezone.utc)
