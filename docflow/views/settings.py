# docflow/views/settings.py
#
# Settings pages. Preferences are read from the local store on mount and
# only written back on an explicit save.

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.core.roles import ADMIN_ONLY
from docflow.models.enums import SignatureType
from docflow.schemas.preferences import (
    AppSettings,
    NotificationSettings,
    ProfileDraft,
    SignatureDraft,
)
from docflow.schemas.user import Signature
from docflow.services.directory_service import validate_password_reset
from docflow.services.scope import ScopeClosed
from docflow.views.base import View


class NotificationSettingsView(View):
    name = "notification-settings"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.preferences = runtime.preferences
        self.settings = NotificationSettings()

    async def load(self) -> None:
        self.settings = self.preferences.load_notification_settings()

    def toggle(self, field_name: str) -> bool:
        if field_name not in NotificationSettings.model_fields:
            raise KeyError(field_name)
        value = not getattr(self.settings, field_name)
        self.settings = self.settings.model_copy(update={field_name: value})
        return value

    def save(self) -> None:
        self.preferences.save_notification_settings(self.settings)
        self.notifier.success(
            "Notification settings updated",
            "Your notification preferences have been saved",
        )


class AppSettingsView(View):
    name = "app-settings"
    required_roles = ADMIN_ONLY

    def __init__(self, runtime):
        super().__init__(runtime)
        self.preferences = runtime.preferences
        self.settings = AppSettings()

    async def load(self) -> None:
        self.settings = self.preferences.load_app_settings()

    def update(self, **changes) -> AppSettings:
        self.settings = AppSettings.model_validate({**self.settings.model_dump(), **changes})
        return self.settings

    def save(self) -> None:
        self.preferences.save_app_settings(self.settings)
        self.notifier.success("Settings saved", "Application settings have been updated")

    def reset(self) -> None:
        self.settings = AppSettings()
        self.preferences.save_app_settings(self.settings)
        self.notifier.success("Settings reset", "Application settings restored to defaults")


class ProfileSettingsView(View):
    """Profile form: edits are drafted locally, then pushed to the backend."""

    name = "profile-settings"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.preferences = runtime.preferences
        self.draft = ProfileDraft()
        self.saving = False

    async def load(self) -> None:
        draft = self.preferences.load_profile_draft()
        user = self.session.user
        # an empty draft is seeded from the signed-in user
        if user is not None and not draft.email:
            draft = ProfileDraft(
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone or "",
                department=user.department_name or "",
                position=user.position or "",
                avatar=user.avatar or "",
            )
        self.draft = draft

    def edit(self, **changes) -> ProfileDraft:
        self.draft = self.draft.model_copy(update=changes)
        self.preferences.save_profile_draft(self.draft)
        return self.draft

    async def save(self) -> bool:
        if not (self.draft.first_name and self.draft.last_name and self.draft.email):
            self.notifier.error("Validation Error", "Name and email are required")
            return False

        body = self.draft.model_dump(
            by_alias=True,
            include={"first_name", "last_name", "email", "phone", "position"},
        )
        self.saving = True
        try:
            user = await self.scope.run(self.api.update_profile(body))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update profile")
            return False
        finally:
            self.saving = False

        if user is None and self.session.user is not None:
            user = self.session.user.model_copy(
                update={
                    "first_name": self.draft.first_name,
                    "last_name": self.draft.last_name,
                    "email": self.draft.email,
                    "phone": self.draft.phone or None,
                    "position": self.draft.position or None,
                }
            )
        if user is not None:
            self.session.user = user
        self.preferences.save_profile_draft(self.draft)
        self.notifier.success("Profile updated", "Your profile has been saved")
        return True

    async def change_password(self, current_password: str, new_password: str, confirm_password: str) -> bool:
        try:
            if not current_password:
                raise ValidationError("missing_fields", "Please fill in all fields")
            validate_password_reset(new_password, confirm_password)
        except ValidationError as exc:
            self.notifier.error("Validation Error", exc.message)
            return False

        self.saving = True
        try:
            await self.scope.run(self.api.change_password(current_password, new_password))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to change password")
            return False
        finally:
            self.saving = False

        self.notifier.success("Password changed", "Your password has been updated")
        return True


class SignatureSettingsView(View):
    name = "signature-settings"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.preferences = runtime.preferences
        self.draft = SignatureDraft()
        self.signature: Optional[Signature] = None
        self.saving = False

    async def load(self) -> None:
        self.draft = self.preferences.load_signature_draft()
        self.signature = await self.api.get_signature()

    async def save(self, text: Optional[str] = None, image_url: Optional[str] = None) -> bool:
        if not text and not image_url:
            self.notifier.error("Validation Error", "Draw, type or upload a signature first")
            return False

        signature = Signature(
            enabled=True,
            type=SignatureType.Image if image_url else SignatureType.Text,
            data=image_url or text,
        )
        self.saving = True
        try:
            self.signature = await self.scope.run(self.api.update_signature(signature))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update signature")
            return False
        finally:
            self.saving = False

        self.draft = SignatureDraft(
            has_signature=True,
            signature_url=image_url or "",
            signature_text=text or "",
        )
        self.preferences.save_signature_draft(self.draft)
        self.notifier.success("Signature saved", "Your signature has been updated")
        return True
