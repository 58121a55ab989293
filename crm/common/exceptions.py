from typing import Any

import sentry_sdk
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pymongo.errors import PyMongoError


class InternalException(Exception):
    """
    All internal exceptions should inherit from this. We are handled
    vaguely publicly
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal Server Error'
    default_code = 'internal_failure'

    def __init__(self, message: str | None = None, context: dict[Any, Any] | Any = None):
        self.message = message or self.default_detail
        self.context = context or dict()

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.message})'


class InternalError(InternalException):
    """
    Unexpected failure while serving a request
    """

    ...


class APIException(Exception):
    """
    API view layer exceptions
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    default_code = 'invalid_request'

    # Match the internal interface message
    def __init__(self, message: str | None = None, code: int | None = None):
        self.message = message or self.default_detail
        self.code = code or self.status_code

    def __str__(self) -> str:
        return f'{self.__class__.__name__}({self.message})'


class ValidationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Request.'
    default_code = 'invalid_request'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict.'
    default_code = 'conflict'


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({'error': message, **extra}),
    )


async def internal_exception_handler(request: Request, exc: InternalException) -> JSONResponse:
    """
    Internal failures are logged in full and reported vaguely
    """
    logger.opt(exception=exc).error(f'{exc} context={exc.context}')
    return error_response(exc.status_code, InternalException.default_detail)


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """
    Store errors that escaped the repository are treated as internal failures
    """
    logger.opt(exception=exc).error(f'Database error: {exc}')
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalException.default_detail)


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    return error_response(exc.code, exc.message)


def _describe_validation_errors(details: list[dict[str, Any]]) -> str:
    missing = []
    invalid = []
    for error in details:
        # Drop the 'body' / 'query' prefix from the location
        loc = [str(part) for part in error.get('loc', ())[1:]]
        field = '.'.join(loc) or 'body'
        if error.get('type') == 'missing':
            missing.append(field)
        else:
            invalid.append(f"{field}: {error.get('msg')}")

    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return f"Invalid request: {'; '.join(invalid)}"


async def inbound_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed input is a client error rather than a 422
    """
    details = exc.errors()
    sentry_sdk.add_breadcrumb(category='validation', message=str(details), level='info')

    modified_details = []
    for error in details:
        modified_details.append(
            {
                'loc': error['loc'],
                'message': error['msg'],
                'type': error['type'],
            }
        )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        _describe_validation_errors(details),
        detail=modified_details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort so callers always receive the error envelope
    """
    logger.opt(exception=exc).error(f'Unhandled exception: {exc}')
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalException.default_detail)
