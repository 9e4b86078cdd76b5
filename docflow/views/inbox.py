# docflow/views/inbox.py

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.models.enums import RequestAction
from docflow.schemas.request import Request
from docflow.services.scope import ScopeClosed
from docflow.services.workflow_service import (
    build_action_payload,
    is_inbox_item,
    past_tense,
    validate_request_action,
)
from docflow.views.base import View


class RequestInboxView(View):
    """Requests awaiting action from the current user's department."""

    name = "request-inbox"
    load_error = "Failed to load requests"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.requests: list[Request] = []
        self.selected: Optional[Request] = None
        self.comment = ""
        self.require_signature = False
        self.processing = False

    async def load(self) -> None:
        requests = await self.api.list_incoming_requests()
        # only pending requests can still be acted on
        self.requests = [r for r in requests if is_inbox_item(r)]

    def select(self, request_id: str) -> Optional[Request]:
        self.selected = next((r for r in self.requests if r.id == request_id), None)
        self.comment = ""
        self.require_signature = False
        return self.selected

    async def take_action(
        self,
        action: RequestAction | str,
        comment: Optional[str] = None,
        require_signature: Optional[bool] = None,
    ) -> bool:
        if comment is not None:
            self.comment = comment
        if require_signature is not None:
            self.require_signature = require_signature

        request = self.selected
        try:
            action = validate_request_action(request, action, self.comment)
        except ValidationError as exc:
            title = "Comment required" if exc.reason == "comment_required" else "Action not allowed"
            self.notifier.error(title, exc.message)
            return False

        self.processing = True
        try:
            payload = build_action_payload(action, self.comment, self.require_signature)
            await self.scope.run(self.api.take_request_action(request.id, payload))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Action failed", exc.message or f"Failed to {action.value} request")
            return False
        finally:
            self.processing = False

        # only after the backend confirmed the transition
        self.requests = [r for r in self.requests if r.id != request.id]
        self.selected = None
        self.comment = ""
        self.require_signature = False

        done = past_tense(action)
        self.notifier.success(f"Request {done} successfully", f"{request.title} has been {done}")
        return True
