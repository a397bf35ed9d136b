"""
User record Pydantic models
"""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Full name of the user")
    email: str = Field(..., min_length=1, description="Email address, not format-checked")


class UserUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """A persisted user record; id is assigned by the store"""
    id: int
    name: str
    email: str
