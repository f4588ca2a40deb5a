# signature_api/models.py
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    PENDING = "Pending"
    SIGNED = "Signed"


class _Record(BaseModel):
    # records are stored and served with camelCase keys
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# physician allowed to sign documents
class Physician(_Record):
    id: str
    name: str


# document waiting for (or carrying) a physician signature
class Document(_Record):
    id: str
    name: str = ""
    status: DocumentStatus = DocumentStatus.PENDING
    file_path: str = Field("", alias="filePath")
    signed_file_path: Optional[str] = Field(None, alias="signedFilePath")
    physician_id: str = Field("", alias="physicianId")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    signed_at: Optional[datetime] = Field(None, alias="signedAt")

    @model_validator(mode="after")
    def _check_signed_state(self):
        has_signature = bool(self.signed_file_path) and self.signed_at is not None
        if self.is_signed != has_signature:
            raise ValueError(
                f"document {self.id}: status {self.status.value} does not match signedFilePath/signedAt"
            )
        return self

    @property
    def is_signed(self) -> bool:
        return self.status == DocumentStatus.SIGNED

    @property
    def active_file_path(self) -> str:
        # the signed artifact replaces the original once it exists
        if self.is_signed and self.signed_file_path:
            return self.signed_file_path
        return self.file_path

    def mark_signed(self, signed_file_path: str, signed_at: Optional[datetime] = None) -> "Document":
        return self.model_copy(
            update={
                "status": DocumentStatus.SIGNED,
                "signed_file_path": signed_file_path,
                "signed_at": signed_at or utcnow(),
            }
        )


# outcome of one id in a bulk signing request
class SignResult(_Record):
    document_id: str = Field(alias="documentId")
    success: bool
    error: Optional[str] = None
