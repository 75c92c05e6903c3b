from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from models.AdminUser import AdminRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class LoginSuccessResponse(BaseModel):
    success: bool = True
    token: str


class AdminInfo(BaseModel):
    id: str
    email: str
    role: AdminRole
    vendor_id: Optional[str] = None


class MeResponse(BaseModel):
    admin: AdminInfo


class LogoutSuccessResponse(BaseModel):
    message: str
