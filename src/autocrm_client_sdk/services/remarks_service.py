from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Union

from ..clients.remarks import RemarksClient
from ..exceptions import (
    REMARK_CANCEL_FORBIDDEN_MESSAGE,
    ApiError,
    ConflictError,
    ForbiddenError,
    RemarkCancelForbiddenError,
    RemarkLimitReachedError,
    ValidationError,
)
from ..models import RoleRef, SessionUser
from ..models_bookings import Booking
from ..models_enquiries import Enquiry
from ..models_remarks import Remark, RemarkAuthor
from ..remark_rules import (
    DEFAULT_POLICY,
    REMARK_LIMIT_MESSAGE,
    RemarkPolicy,
    ensure_can_add,
    ensure_can_cancel,
    validate_cancellation_reason,
    validate_remark_text,
)
from ..remark_thread import RemarkThread

logger = logging.getLogger(__name__)

LIMIT_MARKERS = ("limit", "maximum")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _is_limit_rejection(exc: ApiError) -> bool:
    message = exc.message.lower()
    return any(marker in message for marker in LIMIT_MARKERS)


class RemarksService:
    """Adds and cancels remarks with the client-side rules applied first."""

    def __init__(
        self,
        remarks_client: RemarksClient,
        actor: SessionUser,
        policy: RemarkPolicy = DEFAULT_POLICY,
    ) -> None:
        self.remarks_client = remarks_client
        self.actor = actor
        self.policy = policy

    def add_remark(
        self,
        thread: RemarkThread,
        text: str,
        entity: Union[Enquiry, Booking, None] = None,
    ) -> Remark:
        cleaned = validate_remark_text(text)
        ensure_can_add(thread.remarks, entity, self.policy)
        logger.info(
            "remark_add_attempt",
            extra={"remark_type": thread.remark_type.value, "entity_id": thread.entity_id},
        )
        try:
            remark = self.remarks_client.add_remark(thread.remark_type, thread.entity_id, cleaned)
        except (ValidationError, ConflictError) as exc:
            if _is_limit_rejection(exc):
                logger.warning("remark_add_limit_rejected", extra={"entity_id": thread.entity_id})
                raise RemarkLimitReachedError(
                    code="REMARK_LIMIT_REACHED",
                    message=exc.message or REMARK_LIMIT_MESSAGE,
                    details=exc.details,
                    status_code=exc.status_code,
                    raw_payload=exc.raw_payload,
                ) from exc
            raise
        remark = self._fill_author(remark, cleaned)
        thread.apply_added(remark)
        logger.info("remark_add_success", extra={"remark_id": remark.id, "entity_id": thread.entity_id})
        return remark

    def cancel_remark(self, thread: RemarkThread, remark_id: str, reason: str) -> Remark:
        cleaned = validate_cancellation_reason(reason)
        existing = thread.find(remark_id)
        if existing is not None:
            ensure_can_cancel(existing, self.actor)
        logger.info("remark_cancel_attempt", extra={"remark_id": remark_id})
        try:
            remark = self.remarks_client.cancel_remark(remark_id, cleaned)
        except ForbiddenError as exc:
            logger.warning("remark_cancel_forbidden", extra={"remark_id": remark_id})
            raise RemarkCancelForbiddenError(
                code="REMARK_CANCEL_FORBIDDEN",
                message=REMARK_CANCEL_FORBIDDEN_MESSAGE,
                details=exc.details,
                status_code=exc.status_code,
                raw_payload=exc.raw_payload,
            ) from exc
        # some backends echo only the id; cancellation itself is the contract
        updates: dict[str, object] = {
            "cancelled": True,
            "cancellation_reason": remark.cancellation_reason or cleaned,
            "cancelled_at": remark.cancelled_at or _now_iso(),
        }
        base = existing if existing is not None and not remark.remark else remark
        remark = base.model_copy(update={**updates, "id": remark.id})
        thread.apply_cancelled(remark)
        logger.info("remark_cancel_success", extra={"remark_id": remark.id})
        return remark

    def _fill_author(self, remark: Remark, text: str) -> Remark:
        updates: dict[str, object] = {}
        if not remark.created_by:
            role = RoleRef(name=self.actor.role) if self.actor.role else None
            updates["created_by"] = RemarkAuthor(id=self.actor.id, name=self.actor.name, role=role)
        if not remark.created_at:
            updates["created_at"] = _now_iso()
        if not remark.remark:
            updates["remark"] = text
        return remark.model_copy(update=updates) if updates else remark
