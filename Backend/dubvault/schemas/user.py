from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from uuid import UUID

class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    email: Optional[EmailStr] = None

class UserCreate(UserBase):
    # Raw password, hashed before storage. bcrypt only reads the first 72 bytes.
    password: str = Field(..., min_length=6, max_length=72)

class UserResponse(UserBase):
    id: UUID
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class UserPublicResponse(BaseModel):
    """Schema for publicly available user information."""
    id: UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    username: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
