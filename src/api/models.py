"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """
    Request model for the landing page signup form.

    Fields are optional at the schema level so that a missing field is
    reported by the domain as a 400 with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    recaptcha_token: str | None = Field(
        default=None,
        alias="recaptchaToken",
        description="reCAPTCHA token from the landing page (required when verification is enabled)",
    )


class MessageResponse(BaseModel):
    """Response model for every signup outcome, success or error."""

    message: str


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
