from typing import Optional

from pydantic import BaseModel

from catalog_api.schemas.base import BaseCreateSchema


class LoginRequest(BaseCreateSchema):
    username: Optional[str] = None
    password: Optional[str] = None


class AdminUserResponse(BaseModel):
    username: str
    name: str
    role: str


class LoginResponse(BaseModel):
    success: bool = True
    user: AdminUserResponse


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Logged out successfully"
