from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .models_bookings import Booking
from .models_enquiries import Enquiry
from .models_remarks import Remark, RemarkType
from .remark_rules import RECENT_REMARKS_WINDOW, active_remarks, recent_remarks, sort_newest_first


@dataclass
class RemarkThread:
    """Known remark history of one enquiry or booking.

    The server owns the full history; this only mirrors what the client has
    seen so the active count and the recent view can be computed locally.
    """

    remark_type: RemarkType
    entity_id: str
    remarks: list[Remark] = field(default_factory=list)
    recent_window: int = RECENT_REMARKS_WINDOW

    @classmethod
    def for_entity(cls, entity: Union[Enquiry, Booking]) -> "RemarkThread":
        remark_type = RemarkType.BOOKING if isinstance(entity, Booking) else RemarkType.ENQUIRY
        return cls(remark_type=remark_type, entity_id=entity.id, remarks=sort_newest_first(entity.remark_history))

    @property
    def active(self) -> list[Remark]:
        return active_remarks(self.remarks)

    @property
    def recent(self) -> list[Remark]:
        return recent_remarks(self.remarks, self.recent_window)

    @property
    def active_count(self) -> int:
        return len(self.active)

    def find(self, remark_id: str) -> Remark | None:
        for remark in self.remarks:
            if remark.id == remark_id:
                return remark
        return None

    def apply_added(self, remark: Remark) -> None:
        self.remarks = sort_newest_first([remark, *self.remarks])

    def apply_cancelled(self, remark: Remark) -> None:
        self.remarks = [remark if existing.id == remark.id else existing for existing in self.remarks]
