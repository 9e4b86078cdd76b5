# docflow/services/preferences_service.py

from typing import Type, TypeVar

from loguru import logger
from pydantic import ValidationError as SchemaError

from docflow.core.storage import LocalStore
from docflow.schemas.common import CamelModel
from docflow.schemas.preferences import (
    AppSettings,
    NotificationSettings,
    ProfileDraft,
    SignatureDraft,
)

M = TypeVar("M", bound=CamelModel)

# -----------------------------
# Storage keys
# -----------------------------
NOTIFICATION_SETTINGS_KEY = "notificationSettings"
PROFILE_DRAFT_KEY = "profileData"
SIGNATURE_DRAFT_KEY = "signatureData"
APP_SETTINGS_KEY = "appSettings"


class PreferencesStore:
    """Preferences are read on mount and written only on an explicit save."""

    def __init__(self, store: LocalStore):
        self.store = store

    def _load(self, key: str, model: Type[M]) -> M:
        raw = self.store.get_json(key)
        if raw is None:
            return model()
        try:
            return model.model_validate(raw)
        except SchemaError:
            logger.warning(f"Stored '{key}' does not match {model.__name__}; using defaults")
            return model()

    def _save(self, key: str, value: CamelModel) -> None:
        self.store.set_json(key, value.model_dump(by_alias=True, mode="json"))

    # -----------------------------
    # Notification settings
    # -----------------------------
    def load_notification_settings(self) -> NotificationSettings:
        return self._load(NOTIFICATION_SETTINGS_KEY, NotificationSettings)

    def save_notification_settings(self, value: NotificationSettings) -> None:
        self._save(NOTIFICATION_SETTINGS_KEY, value)

    # -----------------------------
    # Profile draft
    # -----------------------------
    def load_profile_draft(self) -> ProfileDraft:
        return self._load(PROFILE_DRAFT_KEY, ProfileDraft)

    def save_profile_draft(self, value: ProfileDraft) -> None:
        self._save(PROFILE_DRAFT_KEY, value)

    # -----------------------------
    # Signature draft
    # -----------------------------
    def load_signature_draft(self) -> SignatureDraft:
        return self._load(SIGNATURE_DRAFT_KEY, SignatureDraft)

    def save_signature_draft(self, value: SignatureDraft) -> None:
        self._save(SIGNATURE_DRAFT_KEY, value)

    # -----------------------------
    # App settings (admin only)
    # -----------------------------
    def load_app_settings(self) -> AppSettings:
        return self._load(APP_SETTINGS_KEY, AppSettings)

    def save_app_settings(self, value: AppSettings) -> None:
        self._save(APP_SETTINGS_KEY, value)
