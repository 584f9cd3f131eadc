from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if end < start:
        raise ValidationError("End date must be on or after start date")
    return start, end
