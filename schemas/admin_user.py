from typing import List, Optional
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from models.AdminUser import AdminRole


class AdminUserCreateRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: AdminRole
    vendor_id: Optional[UUID] = None

    @model_validator(mode="after")
    def check_vendor(self):
        if self.role == AdminRole.VENDOR_MODERATOR and self.vendor_id is None:
            raise ValueError("vendor_id is required for vendor moderators")
        return self


class AdminUserUpdateRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[AdminRole] = None
    vendor_id: Optional[UUID] = None

    @model_validator(mode="after")
    def check_vendor(self):
        if self.role == AdminRole.VENDOR_MODERATOR and self.vendor_id is None:
            raise ValueError("vendor_id is required for vendor moderators")
        return self

    def has_updates(self) -> bool:
        return any(
            value is not None
            for value in (self.email, self.password, self.role, self.vendor_id)
        )


class AdminUserItem(BaseModel):
    id: str
    email: str
    role: str
    vendor_id: Optional[str] = None
    created_at: Optional[datetime] = None


class AdminUserResponse(BaseModel):
    user: AdminUserItem


class AdminUserListResponse(BaseModel):
    users: List[AdminUserItem]


class VendorItem(BaseModel):
    id: str
    email: str


class VendorListResponse(BaseModel):
    vendors: List[VendorItem]


class DeleteSuccessResponse(BaseModel):
    success: bool = True
