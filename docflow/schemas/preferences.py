from typing import Optional

from docflow.schemas.common import CamelModel


# ---------------------------------------------------------
# Locally persisted preference blobs, one key each
# ---------------------------------------------------------
class NotificationSettings(CamelModel):
    email_notifications: bool = True
    push_notifications: bool = True
    sms_notifications: bool = False
    file_updates: bool = True
    request_updates: bool = True
    system_updates: bool = False
    weekly_reports: bool = True
    monthly_reports: bool = True


class ProfileDraft(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    department: str = ""
    position: str = ""
    bio: str = ""
    avatar: str = ""


class SignatureDraft(CamelModel):
    has_signature: bool = False
    signature_url: str = ""
    signature_text: str = ""


class AppSettings(CamelModel):
    theme: str = "light"
    language: str = "en"
    timezone: str = "UTC"
    date_format: str = "MM/DD/YYYY"
    default_view: str = "grid"
    max_file_size: int = 10  # MB
    allowed_file_types: str = "pdf,doc,docx,xls,xlsx,jpg,png"
    session_timeout: int = 30  # minutes
    maintenance_mode: bool = False
    logo_url: Optional[str] = None
