from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class AuditTrailResponse(BaseModel):
    id: str
    document_id: str = Field(alias="documentId")
    original_hash: str = Field(alias="originalHash")
    signed_hash: str = Field(alias="signedHash")
    signed_file_path: str = Field(alias="signedFilePath")
    ip_address: Optional[str] = Field(None, alias="requesterAddress")
    user_agent: Optional[str] = Field(None, alias="userAgent")
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SignedFileVerification(BaseModel):
    audit_id: str = Field(alias="auditId")
    document_id: str = Field(alias="documentId")
    signed_file_path: str = Field(alias="signedFilePath")
    expected_hash: str = Field(alias="expectedHash")
    current_hash: str = Field(alias="currentHash")
    intact: bool

    model_config = ConfigDict(populate_by_name=True)
