"""Maps domain errors to HTTP responses.

Only the error code and the user-safe message reach the client.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RESET_LINK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IMAGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_EVENT_HOST: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_HAS_SALES: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_TYPE_HAS_SALES: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_TYPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INSUFFICIENT_TICKETS: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_ORDER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ORDER_NOT_PAYABLE: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_NOT_SUCCESSFUL: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.INVALID_SIGNATURE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_TICKET_SIGNATURE: status.HTTP_403_FORBIDDEN,
    ErrorCode.BANK_DETAILS_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_BALANCE: status.HTTP_409_CONFLICT,
    ErrorCode.WITHDRAWAL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WITHDRAWAL_NOT_PENDING: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_GATEWAY_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
        if http_status >= 500:
            logger.error("Upstream failure in %s: %s", context.get("view"), exc)
        return Response(error_body(exc.code.value, exc.message), status=http_status)
    return exception_handler(exc, context)
