import pytest

from docflow.core.errors import ValidationError
from docflow.models.enums import FileAction, FileStatus, RequestAction, RequestStatus
from docflow.schemas.file import File
from docflow.schemas.request import Request
from docflow.services.workflow_service import (
    allowed_file_actions,
    allowed_request_actions,
    build_action_payload,
    build_share_request,
    can_share,
    past_tense,
    validate_request_action,
    validate_share,
)

from conftest import make_file, make_request


def test_file_action_table():
    assert allowed_file_actions(FileStatus.Draft) == {FileAction.Share}
    assert allowed_file_actions(FileStatus.Pending) == {
        FileAction.Approve, FileAction.Reject, FileAction.SendBack, FileAction.Signature,
    }
    for status in (FileStatus.Approved, FileStatus.Rejected, FileStatus.SentBack, FileStatus.Active):
        assert allowed_file_actions(status) == set()


def test_request_actions_only_while_pending():
    assert allowed_request_actions(RequestStatus.Pending) == set(RequestAction)
    assert allowed_request_actions(RequestStatus.Approved) == set()
    assert allowed_request_actions(RequestStatus.NeedSignature) == set()


def test_share_requires_files_and_targets():
    draft = File.model_validate(make_file())

    with pytest.raises(ValidationError) as exc:
        validate_share([], ["d-1"])
    assert exc.value.reason == "no_targets_selected"

    with pytest.raises(ValidationError) as exc:
        validate_share([draft], [])
    assert exc.value.reason == "no_targets_selected"

    validate_share([draft], ["d-1"])


def test_only_drafts_can_be_shared():
    pending = File.model_validate(make_file("f-2", status="pending"))
    assert not can_share(pending)

    with pytest.raises(ValidationError) as exc:
        validate_share([pending], ["d-1"])
    assert exc.value.reason == "file_not_shareable"


def test_share_payload():
    payload = build_share_request(["d-1", "d-2"], message="FYI").to_payload()
    assert payload == {"users": ["d-1", "d-2"], "permission": "view", "message": "FYI"}


@pytest.mark.parametrize("action", ["reject", "sendback", "signature"])
@pytest.mark.parametrize("comment", ["", "   ", None])
def test_comment_required_except_for_approve(action, comment):
    request = Request.model_validate(make_request())
    with pytest.raises(ValidationError) as exc:
        validate_request_action(request, action, comment)
    assert exc.value.reason == "comment_required"


def test_approve_without_comment_is_allowed():
    request = Request.model_validate(make_request())
    assert validate_request_action(request, "approve", "") == RequestAction.Approve


def test_action_on_settled_request_is_rejected():
    request = Request.model_validate(make_request(status="Approved"))
    with pytest.raises(ValidationError) as exc:
        validate_request_action(request, RequestAction.Reject, "too late")
    assert exc.value.reason == "invalid_transition"


def test_unknown_action_is_rejected():
    request = Request.model_validate(make_request())
    with pytest.raises(ValidationError) as exc:
        validate_request_action(request, "escalate", "now")
    assert exc.value.reason == "invalid_action"


def test_signature_action_always_requires_signature():
    payload = build_action_payload(RequestAction.Signature, "please sign").to_payload()
    assert payload == {"action": "signature", "comment": "please sign", "requireSignature": True}

    payload = build_action_payload(RequestAction.Approve, "", require_signature=False).to_payload()
    assert payload["requireSignature"] is False

    payload = build_action_payload(RequestAction.Approve, "", require_signature=True).to_payload()
    assert payload["requireSignature"] is True


def test_past_tense_wording():
    assert past_tense(RequestAction.Approve) == "approved"
    assert past_tense(RequestAction.Reject) == "rejected"
    assert past_tense(RequestAction.SendBack) == "sent back"
    assert past_tense(RequestAction.Signature) == "sent for signature"


def test_request_survives_dump_and_reload():
    request = Request.model_validate(make_request(assignedDirector={"_id": "u-9", "firstName": "Dir"}))

    again = Request.model_validate(request.model_dump())
    from_payload = Request.model_validate(request.model_dump(by_alias=True))

    assert again.target_department == from_payload.target_department == "d-1"
    assert again.assigned_director == from_payload.assigned_director == "u-9"
    assert again == request
