from typing import List, Optional
from datetime import datetime

from fastapi import Query
from pydantic import BaseModel, Field, field_validator


class EntryGateResponse(BaseModel):
    id: str
    event_id: str
    name: str
    code: Optional[str] = None
    sort_order: int
    is_active: bool


class EntryGateListResponse(BaseModel):
    event_id: str
    enable_entry_gate_flow: bool
    results: List[EntryGateResponse]


def strip_gate_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Gate name must not be blank")
    return value


def strip_gate_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class EntryGateCreateRequest(BaseModel):
    name: str
    code: Optional[str] = None
    sort_order: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return strip_gate_name(value)

    @field_validator("code")
    @classmethod
    def strip_code(cls, value: Optional[str]) -> Optional[str]:
        return strip_gate_code(value)


class EntryGateUpdateRequest(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    sort_order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return strip_gate_name(value)

    @field_validator("code")
    @classmethod
    def strip_code(cls, value: Optional[str]) -> Optional[str]:
        return strip_gate_code(value)


class EntrySettingsUpdateRequest(BaseModel):
    enable_entry_gate_flow: Optional[bool] = None
    require_social_verification: Optional[bool] = None
    require_email_domain_verification: Optional[bool] = None
    allowed_email_domains: Optional[List[str]] = None

    @field_validator("allowed_email_domains")
    @classmethod
    def normalize_domains(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        domains = []
        for domain in value:
            domain = domain.strip().lower().lstrip("@")
            if domain and domain not in domains:
                domains.append(domain)
        return domains


class EntrySettingsResponse(BaseModel):
    id: str
    enable_entry_gate_flow: bool
    require_social_verification: bool
    require_email_domain_verification: bool
    allowed_email_domains: List[str] = []


class AttendeeItem(BaseModel):
    ticket_id: str
    attendee_name: Optional[str] = None
    ticket_status: str
    scanned_at: Optional[datetime] = None
    order_id: str
    order_status: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    whatsapp_number: Optional[str] = None
    cab_requested: bool = False
    social_handle: Optional[str] = None
    social_verification_status: str = "not_required"
    email_domain: Optional[str] = None
    email_domain_status: str = "not_required"
    created_at: Optional[datetime] = None


class AttendeeListResponse(BaseModel):
    attendees: List[AttendeeItem]
    event: EntrySettingsResponse


class EventOptionsQuery(BaseModel):
    q: Optional[str] = Query(None, description="Search by event title")
    limit: int = Query(50, ge=1, le=200, description="Limit results")


class EventOptionItem(BaseModel):
    id: str
    title: str
    start_at: Optional[datetime] = None
    city: Optional[str] = None


class EventOptionListResponse(BaseModel):
    events: List[EventOptionItem]
