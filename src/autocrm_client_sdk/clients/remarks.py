from __future__ import annotations

from typing import Any, Mapping

from ..models_remarks import (
    AddRemarkRequest,
    CancelRemarkRequest,
    PendingRemarksParams,
    PendingRemarksSummary,
    Remark,
    RemarkType,
)
from .base import BaseClient, to_params


class RemarksClient(BaseClient):
    def add_remark(self, remark_type: RemarkType | str, entity_id: str, text: str) -> Remark:
        kind = RemarkType(remark_type).value
        return self._entity(
            "POST",
            f"/remarks/{kind}/{entity_id}/remarks",
            Remark,
            entity_key="remark",
            json_body=AddRemarkRequest(remark=text).to_wire(),
        )

    def add_enquiry_remark(self, enquiry_id: str, text: str) -> Remark:
        return self.add_remark(RemarkType.ENQUIRY, enquiry_id, text)

    def add_booking_remark(self, booking_id: str, text: str) -> Remark:
        return self.add_remark(RemarkType.BOOKING, booking_id, text)

    def cancel_remark(self, remark_id: str, reason: str) -> Remark:
        return self._entity(
            "POST",
            f"/remarks/remarks/{remark_id}/cancel",
            Remark,
            entity_key="remark",
            json_body=CancelRemarkRequest(reason=reason).to_wire(),
        )

    def pending_summary(
        self, params: PendingRemarksParams | Mapping[str, Any] | None = None
    ) -> PendingRemarksSummary:
        return self._entity(
            "GET",
            "/remarks/pending/summary",
            PendingRemarksSummary,
            params=to_params(params),
        )
