"""Schemas for passcode endpoints."""

from pydantic import BaseModel, Field


class OtpRequest(BaseModel):
    recipient: str = Field(min_length=1, max_length=254, description="Phone number or email")


class OtpVerifyRequest(OtpRequest):
    code: str = Field(min_length=1, max_length=12)


class OtpIssueResponse(BaseModel):
    recipient: str
    expires_in_seconds: int


class OtpVerifyResponse(BaseModel):
    verified: bool


__all__ = ["OtpIssueResponse", "OtpRequest", "OtpVerifyRequest", "OtpVerifyResponse"]
