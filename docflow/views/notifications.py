# docflow/views/notifications.py

from docflow.core.errors import ApiError
from docflow.schemas.notification import Notification
from docflow.services.scope import ScopeClosed
from docflow.views.base import View


class NotificationsView(View):
    """Bell dropdown: unread count plus mark-as-read."""

    name = "notifications"
    load_error = "Failed to load notifications"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.notifications: list[Notification] = []

    async def load(self) -> None:
        self.notifications = await self.api.list_notifications()

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.read)

    def _mark_local(self, notification_id=None) -> None:
        self.notifications = [
            n.model_copy(update={"read": True}) if notification_id in (None, n.id) else n
            for n in self.notifications
        ]

    async def mark_read(self, notification_id: str) -> bool:
        try:
            await self.scope.run(self.api.mark_notification_read(notification_id))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update notification")
            return False
        self._mark_local(notification_id)
        self.notifier.success("Notification marked as read")
        return True

    async def mark_all_read(self) -> bool:
        try:
            await self.scope.run(self.api.mark_all_notifications_read())
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update notifications")
            return False
        self._mark_local()
        self.notifier.success("Notifications", "All notifications marked as read")
        return True
