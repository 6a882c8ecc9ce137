from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Schema for admin login with the shared password."""
    password: str = Field(..., min_length=1)


class AdminStatusResponse(BaseModel):
    """Whether the caller holds a valid admin session."""
    authenticated: bool


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
