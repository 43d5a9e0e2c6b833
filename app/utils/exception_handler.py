import logging
from django.http import Http404
from rest_framework.views import exception_handler
from rest_framework.exceptions import (
    APIException,
    ValidationError,
    NotAuthenticated,
    AuthenticationFailed,
    PermissionDenied,
    NotFound,
)
from rest_framework import status
from app.utils.response import api_response

logger = logging.getLogger(__name__)


def format_validation_error(error_detail):
    """
    Convert DRF ValidationError detail into a readable error message.

    Handles:
    - Dict format: {'settings': [ErrorDetail(...)]} -> "Settings: This field is required."
    - List format: [ErrorDetail(...)] -> "This field is required."
    - String format: "error message" -> "error message"
    """
    if isinstance(error_detail, dict):
        messages = []
        for field, errors in error_detail.items():
            if not isinstance(errors, (list, tuple)):
                errors = [errors]
            error_strings = [format_validation_error(error) for error in errors]
            field_name = str(field).replace('_', ' ').title()
            messages.append(f"{field_name}: {', '.join(error_strings)}")
        return ". ".join(messages)

    elif isinstance(error_detail, list):
        return ". ".join(format_validation_error(error) for error in error_detail)

    elif isinstance(error_detail, str):
        # ErrorDetail is a str subclass
        return str(error_detail)

    else:
        return str(error_detail)


def custom_exception_handler(exc, context):
    """
    Global exception handler for VentureFlow.
    Ensures ALL API errors use the api_response() format.
    """
    response = exception_handler(exc, context)

    view = context.get('view', None)
    view_name = view.__class__.__name__ if view else 'UnknownView'
    logger.error(f"[{view_name}] Exception: {exc}")

    # --- Handle Auth Errors ---
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return api_response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            status="failure",
            data={},
            error_code="AUTH_ERROR",
            error_message="Authentication credentials were not provided or invalid."
        )

    # --- Handle Permission Denied ---
    if isinstance(exc, PermissionDenied):
        return api_response(
            status_code=status.HTTP_403_FORBIDDEN,
            status="failure",
            data={},
            error_code="PERMISSION_DENIED",
            error_message="You do not have permission to perform this action."
        )

    # --- Handle Not Found ---
    if isinstance(exc, (NotFound, Http404)):
        return api_response(
            status_code=status.HTTP_404_NOT_FOUND,
            status="failure",
            data={},
            error_code="NOT_FOUND",
            error_message=str(exc) or "Not found."
        )

    # --- Handle Validation Errors ---
    if isinstance(exc, ValidationError):
        return api_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            status="failure",
            data={},
            error_code="VALIDATION_ERROR",
            error_message=format_validation_error(exc.detail)
        )

    # --- Handle other DRF API Exceptions (MethodNotAllowed, ParseError, ...) ---
    if isinstance(exc, APIException):
        return api_response(
            status_code=response.status_code if response is not None else exc.status_code,
            status="failure",
            data={},
            error_code="API_EXCEPTION",
            error_message=format_validation_error(exc.detail)
        )

    # --- Handle Unexpected Server Errors ---
    logger.exception("Unhandled Exception", exc_info=exc)
    return api_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        status="failure",
        data={},
        error_code="INTERNAL_SERVER_ERROR",
        error_message="An unexpected error occurred. Please try again later."
    )
