from enum import Enum


def _normalize(value) -> str:
    return str(value).strip().lower().replace(" ", "_").replace("-", "_")


class _LenientEnum(str, Enum):
    """Accepts "Sent Back", "SENT_BACK" and "sent_back" alike."""

    @classmethod
    def _missing_(cls, value):
        wanted = _normalize(value)
        for member in cls:
            if member.value.replace("_", "") == wanted.replace("_", ""):
                return member
        return None


class Role(_LenientEnum):
    Admin = "admin"
    Director = "director"
    Department = "department"


class FileStatus(_LenientEnum):
    Draft = "draft"
    Pending = "pending"
    Approved = "approved"
    Rejected = "rejected"
    SentBack = "sent_back"
    Active = "active"


class RequestStatus(_LenientEnum):
    Pending = "pending"
    InReview = "in_review"
    Approved = "approved"
    Rejected = "rejected"
    SentBack = "sent_back"
    NeedSignature = "need_signature"


class Priority(_LenientEnum):
    Low = "low"
    Medium = "medium"
    High = "high"
    Urgent = "urgent"


class RequestAction(_LenientEnum):
    Approve = "approve"
    Reject = "reject"
    SendBack = "sendback"
    Signature = "signature"


class FileAction(_LenientEnum):
    Share = "share"
    Approve = "approve"
    Reject = "reject"
    SendBack = "sendback"
    Signature = "signature"


class SharePermission(_LenientEnum):
    View = "view"
    Edit = "edit"
    Full = "full"


class FolderAccessLevel(_LenientEnum):
    Public = "public"
    Department = "department"
    Private = "private"


class SignatureType(_LenientEnum):
    Text = "text"
    Image = "image"
    Drawn = "drawn"


class ReportFormat(_LenientEnum):
    Pdf = "pdf"
    Excel = "excel"
