"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Registration fields are plain strings: the domain service owns validation
so that API callers get the same error messages as any other caller.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    email: str = ""
    name: str = ""
    password: str = Field("", description="User password (min 6 characters)")


class RegisterResponse(BaseModel):
    """Registration outcome, mirroring the domain RegistrationResult."""

    success: bool
    user_id: int | None = None
    error: str | None = None


class UserResponse(BaseModel):
    """Public view of a stored user (no password hash)."""

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
