"""
API routes - Signup endpoint.

This module defines the HTTP endpoint:
- POST /api/signup - Validate, verify, store and notify a new registrant

Every outcome is returned as {"message": ...}.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_signup_service
from src.api.models import MessageResponse, SignupRequest
from src.domain.exceptions import EmailAlreadyRegistered, MissingFields, VerificationFailed
from src.domain.ports import FailureReason
from src.domain.signup import SignupService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["signup"])

FIELDS_REQUIRED_MESSAGE = "name, email and phone are required"
ALREADY_REGISTERED_MESSAGE = "This email is already registered"


def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/signup",
    response_model=MessageResponse,
    responses={
        400: {"model": MessageResponse, "description": "Missing field or verification failed"},
        409: {"model": MessageResponse, "description": "Email already registered"},
        500: {"model": MessageResponse, "description": "Server error"},
    },
    summary="Sign up from the landing page",
    description="Store a new registrant and send the admin alert and welcome emails.",
)
def signup(
    request_data: SignupRequest,
    request: Request,
    service: SignupService = Depends(get_signup_service),
) -> JSONResponse:
    """
    Register a contact from the landing page form.

    - **name**, **email**, **phone**: required, non-blank
    - **recaptchaToken**: checked only when a reCAPTCHA secret is configured
    """
    client_address = request.client.host if request.client else None

    try:
        service.signup(
            name=request_data.name,
            email=request_data.email,
            phone=request_data.phone,
            token=request_data.recaptcha_token,
            client_address=client_address,
        )
    except MissingFields:
        return message_response(status.HTTP_400_BAD_REQUEST, FIELDS_REQUIRED_MESSAGE)
    except VerificationFailed as e:
        if e.outcome.reason == FailureReason.LOW_SCORE:
            return message_response(
                status.HTTP_400_BAD_REQUEST, "reCAPTCHA score too low (possible bot)"
            )
        return message_response(status.HTTP_400_BAD_REQUEST, "reCAPTCHA verification failed")
    except EmailAlreadyRegistered:
        return message_response(status.HTTP_409_CONFLICT, ALREADY_REGISTERED_MESSAGE)
    except Exception:
        logger.exception("Signup error")
        return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    return message_response(status.HTTP_200_OK, "Signup successful")
