from __future__ import annotations

import json

import pytest
import responses

from autocrm_client_sdk.clients import RemarksClient
from autocrm_client_sdk.exceptions import (
    REMARK_CANCEL_FORBIDDEN_MESSAGE,
    EmptyRemarkError,
    EntityLockedError,
    MissingReasonError,
    RemarkCancelForbiddenError,
    RemarkLimitError,
    RemarkLimitReachedError,
    RemarkPermissionDeniedError,
    ValidationError,
)
from autocrm_client_sdk.models import SessionUser
from autocrm_client_sdk.models_enquiries import Enquiry
from autocrm_client_sdk.models_remarks import Remark, RemarkType
from autocrm_client_sdk.remark_rules import RemarkPolicy
from autocrm_client_sdk.remark_thread import RemarkThread
from autocrm_client_sdk.services import RemarksService

BASE_URL = "https://api.example.com/api"
ADD_URL = f"{BASE_URL}/remarks/enquiry/E1/remarks"

ADVISOR = SessionUser(id="ca-1", name="Ravi", role="CUSTOMER_ADVISOR")
OTHER_ADVISOR = SessionUser(id="ca-2", name="Meena", role="CUSTOMER_ADVISOR")
TEAM_LEAD = SessionUser(id="tl-1", name="Kiran", role="TEAM_LEAD")


def _service(http, actor: SessionUser = ADVISOR) -> RemarksService:
    return RemarksService(RemarksClient(http=http), actor)


def _add_callback(request):
    body = json.loads(request.body)
    index = len(responses.calls)
    remark = {
        "id": f"r-{index}",
        "remark": body["remark"],
        "createdAt": f"2024-06-01T10:{index:02d}:00Z",
    }
    return 201, {}, json.dumps({"success": True, "data": {"remark": remark}})


@responses.activate
def test_add_then_cancel_own_remark(http) -> None:
    enquiry = Enquiry(id="E1", category="HOT")
    thread = RemarkThread.for_entity(enquiry)
    responses.add(
        responses.POST,
        ADD_URL,
        json={"success": True, "data": {"remark": {"id": "R1", "remark": "Customer confirmed test drive"}}},
        status=201,
    )
    responses.add(
        responses.POST,
        f"{BASE_URL}/remarks/remarks/R1/cancel",
        json={"success": True, "data": {"remark": {"id": "R1"}}},
        status=200,
    )
    service = _service(http)

    added = service.add_remark(thread, "  Customer confirmed test drive ", enquiry)

    assert json.loads(responses.calls[0].request.body) == {"remark": "Customer confirmed test drive"}
    assert added.created_by.id == "ca-1"
    assert added.created_by.role_name == "CUSTOMER_ADVISOR"
    assert added.created_at is not None
    assert thread.active_count == 1
    assert thread.recent[0].id == "R1"

    cancelled = service.cancel_remark(thread, "R1", "duplicate entry")

    assert json.loads(responses.calls[1].request.body) == {"reason": "duplicate entry"}
    assert cancelled.cancelled is True
    assert cancelled.cancellation_reason == "duplicate entry"
    assert cancelled.remark == "Customer confirmed test drive"
    assert thread.active_count == 0
    assert thread.recent == []
    assert thread.remarks[0].cancelled is True


@responses.activate
def test_twenty_first_remark_is_refused_locally(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1")
    responses.add_callback(responses.POST, ADD_URL, callback=_add_callback, content_type="application/json")
    service = _service(http)

    for index in range(20):
        service.add_remark(thread, f"follow-up {index}")

    assert thread.active_count == 20
    assert len(thread.recent) == 5
    assert thread.recent[0].remark == "follow-up 19"

    with pytest.raises(RemarkLimitError):
        service.add_remark(thread, "one more")
    assert len(responses.calls) == 20


@responses.activate
def test_server_limit_rejection_is_translated(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1")
    responses.add(
        responses.POST,
        ADD_URL,
        json={"success": False, "message": "Maximum of 20 active remarks reached"},
        status=400,
    )

    with pytest.raises(RemarkLimitReachedError) as excinfo:
        _service(http).add_remark(thread, "late note")

    assert excinfo.value.code == "REMARK_LIMIT_REACHED"
    assert excinfo.value.status_code == 400
    assert thread.remarks == []


@responses.activate
def test_other_validation_errors_pass_through(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1")
    responses.add(responses.POST, ADD_URL, json={"message": "Remark too long"}, status=422)

    with pytest.raises(ValidationError) as excinfo:
        _service(http).add_remark(thread, "x" * 10)

    assert not isinstance(excinfo.value, RemarkLimitReachedError)


@responses.activate
def test_local_rejections_send_nothing(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1")
    service = _service(http)

    with pytest.raises(EmptyRemarkError):
        service.add_remark(thread, "   ")
    with pytest.raises(MissingReasonError):
        service.cancel_remark(thread, "R1", "  ")
    assert len(responses.calls) == 0


@responses.activate
def test_booked_enquiry_still_accepts_remarks(http) -> None:
    booked = Enquiry(id="E1", category="BOOKED")
    thread = RemarkThread.for_entity(booked)
    responses.add(
        responses.POST,
        ADD_URL,
        json={"success": True, "data": {"remark": {"id": "R2", "remark": "Delivery slot fixed"}}},
        status=201,
    )

    added = _service(http).add_remark(thread, "Delivery slot fixed", booked)

    assert added.id == "R2"
    assert thread.active_count == 1


@responses.activate
def test_strict_policy_blocks_remarks_on_locked_enquiry(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1")
    service = RemarksService(RemarksClient(http=http), ADVISOR, RemarkPolicy(allow_remarks_on_locked=False))

    with pytest.raises(EntityLockedError):
        service.add_remark(thread, "after booking", Enquiry(id="E1", category="BOOKED"))
    assert len(responses.calls) == 0


@responses.activate
def test_advisor_cannot_cancel_someone_elses_remark(http) -> None:
    remark = Remark.model_validate(
        {"id": "R7", "remark": "Asked for discount", "createdBy": {"id": "ca-1", "role": "CUSTOMER_ADVISOR"}}
    )
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1", remarks=[remark])

    with pytest.raises(RemarkPermissionDeniedError):
        _service(http, OTHER_ADVISOR).cancel_remark(thread, "R7", "wrong customer")
    assert len(responses.calls) == 0


@responses.activate
def test_team_lead_can_cancel_advisor_remark(http) -> None:
    remark = Remark.model_validate(
        {"id": "R7", "remark": "Asked for discount", "createdBy": {"id": "ca-1", "role": "CUSTOMER_ADVISOR"}}
    )
    thread = RemarkThread(remark_type=RemarkType.ENQUIRY, entity_id="E1", remarks=[remark])
    responses.add(
        responses.POST,
        f"{BASE_URL}/remarks/remarks/R7/cancel",
        json={
            "success": True,
            "data": {
                "remark": {
                    "id": "R7",
                    "remark": "Asked for discount",
                    "cancelled": True,
                    "cancellationReason": "wrong customer",
                    "cancelledAt": "2024-06-02T09:00:00Z",
                }
            },
        },
        status=200,
    )

    cancelled = _service(http, TEAM_LEAD).cancel_remark(thread, "R7", "wrong customer")

    assert cancelled.cancelled_at == "2024-06-02T09:00:00Z"
    assert thread.active_count == 0


@responses.activate
def test_server_forbidden_cancel_is_translated(http) -> None:
    thread = RemarkThread(remark_type=RemarkType.BOOKING, entity_id="B1")
    responses.add(
        responses.POST,
        f"{BASE_URL}/remarks/remarks/R9/cancel",
        json={"message": "Forbidden"},
        status=403,
    )

    with pytest.raises(RemarkCancelForbiddenError) as excinfo:
        _service(http, TEAM_LEAD).cancel_remark(thread, "R9", "not needed")

    assert excinfo.value.message == REMARK_CANCEL_FORBIDDEN_MESSAGE
    assert excinfo.value.status_code == 403
