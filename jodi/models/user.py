from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    # bcrypt only hashes the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    """Admin edit of a user (all fields optional)"""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)


class UserResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = Field(False, serialization_alias="isAdmin")

    class Config:
        from_attributes = True
        populate_by_name = True


class LoginResponse(BaseModel):
    token: str
    message: str = "Login successful"
    is_admin: bool = Field(False, serialization_alias="isAdmin")
    user: UserResponse

    class Config:
        populate_by_name = True
