import uuid

from fastapi import status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request

from crm.common import context

REQUEST_ID_HEADER = 'X-Request-ID'


def get_user_ip_address_from_header(forwarded_header: str | None) -> str:
    """
    Expects the result of "x-forwarded-for" which will be
    a list of IPs separated by a ',' accounting for all
    proxy servers encountered
    """
    user_ip = forwarded_header.split(',')[0] if forwarded_header else ''
    return user_ip.strip()


def get_access_log_level(status_code: int) -> str:
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return 'ERROR'
    if status_code >= status.HTTP_400_BAD_REQUEST:
        return 'WARNING'
    return 'INFO'


def _log_access(request: Request, status_code: int) -> None:
    request_context = context.current()
    client = f'{request.client.host}:{request.client.port}' if request.client else 'unknown'
    logger.log(
        get_access_log_level(status_code),
        f'{client} {request_context.method} {request_context.path} {status_code}',
        http_status_code=status_code,
        http_method=request_context.method,
        endpoint=request_context.path,
        duration=request_context.elapsed,
        user_agent=request.headers.get('user-agent', 'unknown'),
        user_ip=get_user_ip_address_from_header(request.headers.get('x-forwarded-for')),
    )


class RequestResponseMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id (the proxy's when it sent one) that follows
    each log line, and writes one access line once the status is known
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = context.initialize(request_id=request_id, method=request.method.upper(), path=request.url.path)
        try:
            with logger.contextualize(request_id=request_id):
                status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
                try:
                    response = await call_next(request)
                    status_code = response.status_code
                finally:
                    _log_access(request, status_code)
        finally:
            context.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
