from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import minute_of_day
from ..core.enums import PunchKind


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one raw clock event, as captured (no pairing guaranteed)."""

    punch_id: str
    employee_id: str
    timestamp: datetime
    kind: PunchKind
    break_type_id: Optional[str] = None

    @property
    def minute_of_day(self) -> int:
        return minute_of_day(self.timestamp)
