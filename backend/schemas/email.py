from pydantic import EmailStr, Field
from typing import Optional, List
from datetime import datetime

from schemas.base import ORMBase


class EmailTemplateCreate(ORMBase):
    name: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)


class EmailTemplateUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = Field(None, min_length=1)
    body: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class EmailTemplateResponse(ORMBase):
    id: int
    name: str
    subject: str
    body: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmailTemplateEnvelope(ORMBase):
    success: bool = True
    template: EmailTemplateResponse


class EmailTemplateListEnvelope(ORMBase):
    success: bool = True
    templates: List[EmailTemplateResponse]


# Emptiness of subject/body and of the recipient set is checked by the route
# so each case gets its own message.
class SendEmailRequest(ORMBase):
    user_ids: List[int] = Field(default_factory=list)
    custom_emails: List[EmailStr] = Field(default_factory=list)
    subject: str = ""
    body: str = ""
    template_id: Optional[int] = None


class SendStats(ORMBase):
    total: int
    successful: int
    failed: int


class SendEmailResponse(ORMBase):
    success: bool = True
    message: str
    stats: SendStats


class EmailLogResponse(ORMBase):
    id: int
    to: List[str]
    subject: str
    body: str
    status: str
    template_id: Optional[int] = None
    template_name: Optional[str] = None
    error: Optional[str] = None
    sent_at: Optional[datetime] = None


class EmailLogListEnvelope(ORMBase):
    success: bool = True
    logs: List[EmailLogResponse]


class EmailSettings(ORMBase):
    provider: str = "smtp"
    from_name: str = "IndustrialCo"
    from_email: EmailStr = "support@industrialco.com"
    reply_to: Optional[EmailStr] = "no-reply@industrialco.com"


class EmailSettingsEnvelope(ORMBase):
    success: bool = True
    settings: EmailSettings
