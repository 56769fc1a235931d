"""
Pydantic schemas for accounts and profiles.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from venuebook.core.identity import Role


class UserCreate(BaseModel):
    full_name: str = Field(..., max_length=255)
    email: EmailStr
    phone_number: str = Field(..., max_length=50)
    password: str = Field(..., min_length=8, max_length=72)
    confirm_password: Optional[str] = None


class HotelAccountCreate(UserCreate):
    """Admin form for provisioning a hotel operator."""


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    profile_image_url: Optional[str] = Field(None, max_length=1024)


class UserResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone_number: str
    role: Role
    profile_image_url: Optional[str]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role
