from __future__ import annotations

import logging

from ..clients.enquiries import EnquiriesClient
from ..exceptions import EntityLockedError, MissingReasonError
from ..models_enquiries import CategoryChangeResult, Enquiry, EnquiryCategory
from ..remark_rules import LOCKED_MESSAGE, is_enquiry_locked

logger = logging.getLogger(__name__)

LOST_REASON_MESSAGE = "Please provide a reason for marking this enquiry as lost."


class EnquiryService:
    def __init__(self, enquiries_client: EnquiriesClient) -> None:
        self.enquiries_client = enquiries_client

    def available_categories(self, enquiry: Enquiry) -> list[EnquiryCategory]:
        """Categories the user may switch to; empty once BOOKED, LOST or CLOSED."""
        if is_enquiry_locked(enquiry):
            return []
        current = (enquiry.category or "").upper()
        return [category for category in EnquiryCategory if category.value != current]

    def change_category(
        self,
        enquiry: Enquiry,
        category: EnquiryCategory | str,
        reason: str | None = None,
    ) -> CategoryChangeResult:
        target = EnquiryCategory(category)
        if is_enquiry_locked(enquiry):
            raise EntityLockedError(LOCKED_MESSAGE)
        cleaned = (reason or "").strip() or None
        if target is EnquiryCategory.LOST and cleaned is None:
            raise MissingReasonError(LOST_REASON_MESSAGE)
        logger.info(
            "enquiry_category_change_attempt",
            extra={"enquiry_id": enquiry.id, "category": target.value},
        )
        try:
            result = self.enquiries_client.update_category(enquiry.id, target, remarks=cleaned)
        except Exception:
            logger.exception("enquiry_category_change_failure", extra={"enquiry_id": enquiry.id})
            raise
        if not result.enquiry.category:
            # keep the local view consistent when the backend omits the field
            result = result.model_copy(
                update={"enquiry": result.enquiry.model_copy(update={"category": target.value})}
            )
        logger.info(
            "enquiry_category_change_success",
            extra={"enquiry_id": enquiry.id, "category": result.enquiry.category},
        )
        return result
