# docflow/services/workflow_service.py
#
# Client-side mirror of the backend's status rules. Used for UI gating and
# for rejecting doomed actions before a request is sent; the backend stays
# the source of truth for every transition.

from typing import Iterable, Optional, Sequence

from docflow.core.errors import ValidationError
from docflow.models.enums import (
    FileAction,
    FileStatus,
    RequestAction,
    RequestStatus,
    SharePermission,
)
from docflow.schemas.file import File, FileActionPayload, ShareRequest
from docflow.schemas.request import Request, RequestActionPayload, RequestCreate

# ==========================================================
# TRANSITION TABLES
# ==========================================================
FILE_ACTIONS: dict[FileStatus, frozenset[FileAction]] = {
    FileStatus.Draft: frozenset({FileAction.Share}),
    FileStatus.Pending: frozenset({
        FileAction.Approve,
        FileAction.Reject,
        FileAction.SendBack,
        FileAction.Signature,
    }),
    FileStatus.Approved: frozenset(),
    FileStatus.Rejected: frozenset(),
    FileStatus.SentBack: frozenset(),
    FileStatus.Active: frozenset(),
}

REQUEST_ACTIONS: dict[RequestStatus, frozenset[RequestAction]] = {
    RequestStatus.Pending: frozenset(RequestAction),
}

# Every action except approve needs an explanation for the requester
COMMENT_REQUIRED = frozenset({
    RequestAction.Reject,
    RequestAction.SendBack,
    RequestAction.Signature,
})


def allowed_file_actions(status: FileStatus) -> frozenset[FileAction]:
    return FILE_ACTIONS.get(status, frozenset())


def allowed_request_actions(status: RequestStatus) -> frozenset[RequestAction]:
    return REQUEST_ACTIONS.get(status, frozenset())


# Reviewer decisions on a received file and where each one lands
FILE_REVIEW_OUTCOMES: dict[FileAction, FileStatus] = {
    FileAction.Approve: FileStatus.Approved,
    FileAction.Reject: FileStatus.Rejected,
    FileAction.SendBack: FileStatus.SentBack,
}


def can_share(file: File) -> bool:
    return FileAction.Share in allowed_file_actions(file.status)


def is_inbox_item(request: Request) -> bool:
    return request.status == RequestStatus.Pending


# ==========================================================
# SHARE
# ==========================================================
def validate_share(files: Sequence[File], targets: Sequence[str]) -> None:
    if not files:
        raise ValidationError("no_targets_selected", "Please select at least one file to share")
    if not targets:
        raise ValidationError(
            "no_targets_selected",
            "Please select at least one department to share with",
        )
    for file in files:
        if not can_share(file):
            raise ValidationError(
                "file_not_shareable",
                f"{file.title or file.id} is {file.status.value}; only draft files can be shared",
            )


def build_share_request(
    targets: Iterable[str],
    message: str = "",
    permission: SharePermission = SharePermission.View,
) -> ShareRequest:
    return ShareRequest(users=list(targets), permission=permission, message=message)


# ==========================================================
# REQUEST ACTIONS
# ==========================================================
def coerce_action(action: RequestAction | str) -> RequestAction:
    try:
        return RequestAction(action)
    except ValueError:
        raise ValidationError("invalid_action", f"Unknown action: {action}")


def validate_request_action(
    request: Optional[Request],
    action: RequestAction | str,
    comment: Optional[str],
) -> RequestAction:
    action = coerce_action(action)

    if request is None:
        raise ValidationError("no_request_selected", "Select a request first")

    if action not in allowed_request_actions(request.status):
        raise ValidationError(
            "invalid_transition",
            f"Cannot {action.value} a request that is {request.status.value}",
        )

    if action in COMMENT_REQUIRED and not (comment or "").strip():
        raise ValidationError("comment_required", "Please provide a comment for this action")

    return action


def build_action_payload(
    action: RequestAction,
    comment: Optional[str] = "",
    require_signature: bool = False,
) -> RequestActionPayload:
    return RequestActionPayload(
        action=action,
        comment=comment or "",
        require_signature=action == RequestAction.Signature or require_signature,
    )


ACTION_PAST_TENSE = {
    RequestAction.Approve: "approved",
    RequestAction.Reject: "rejected",
    RequestAction.SendBack: "sent back",
    RequestAction.Signature: "sent for signature",
}


def past_tense(action: RequestAction) -> str:
    return ACTION_PAST_TENSE[action]


# ==========================================================
# FILE REVIEW (received files)
# ==========================================================
def validate_file_action(
    file: Optional[File],
    action: FileAction | str,
    comment: Optional[str],
) -> FileAction:
    try:
        action = FileAction(action)
    except ValueError:
        raise ValidationError("invalid_action", f"Unknown action: {action}")
    if action not in FILE_REVIEW_OUTCOMES:
        raise ValidationError("invalid_action", f"{action.value} is not a review decision")

    if file is None:
        raise ValidationError("no_file_selected", "Select a file first")

    if action not in allowed_file_actions(file.status):
        raise ValidationError(
            "invalid_transition",
            f"Cannot {action.value} a file that is {file.status.value}",
        )

    if action != FileAction.Approve and not (comment or "").strip():
        raise ValidationError("comment_required", "Please provide a comment for this action")
    return action


def build_file_action_payload(
    action: FileAction,
    comment: Optional[str] = "",
    require_signature: bool = False,
) -> FileActionPayload:
    # a signature can only be asked for on approval
    return FileActionPayload(
        action=action,
        comment=comment or "",
        requires_signature=require_signature if action == FileAction.Approve else False,
    )


FILE_ACTION_PAST_TENSE = {
    FileAction.Approve: "approved",
    FileAction.Reject: "rejected",
    FileAction.SendBack: "sent back",
}


# ==========================================================
# NEW REQUEST
# ==========================================================
def validate_request_create(payload: RequestCreate) -> None:
    if not payload.title.strip():
        raise ValidationError("title_required", "Please enter a title for your request")
    if not payload.description.strip():
        raise ValidationError("description_required", "Please enter a description for your request")
    if not payload.target_department:
        raise ValidationError("department_required", "Please select a target department")
