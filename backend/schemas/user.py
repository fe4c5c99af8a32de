from pydantic import EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime

from schemas.base import ORMBase

Role = Literal["admin", "user"]

# Shared properties for user models
class UserBase(ORMBase):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str = Field(..., min_length=1)

# Self-registration. Any role sent by the client is ignored.
class UserCreate(UserBase):
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    company: Optional[str] = None
    phone: Optional[str] = None

# Account created by an administrator
class AdminUserCreate(UserBase):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    password: Optional[str] = None
    role: Role = "user"
    company: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True

# Partial update by an administrator
class AdminUserUpdate(ORMBase):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None

# Output schema for user profile details
class UserResponse(UserBase):
    id: int
    first_name: str
    last_name: str
    role: str
    company: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


class UserEnvelope(ORMBase):
    success: bool = True
    user: UserResponse


class UserListEnvelope(ORMBase):
    success: bool = True
    users: List[UserResponse]


class LoginResponse(UserEnvelope):
    token: str
