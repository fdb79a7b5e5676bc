"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Image to analyze, as bare base64 or a data URL."""

    image: str = Field(min_length=1)


class SignupRequest(BaseModel):
    """Sign-up payload."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Login payload."""

    email: str
    password: str
