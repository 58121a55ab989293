"""
Per request state shared with log formatters and error reports
"""

import time
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from sentry_sdk import set_tag as set_sentry_tag


@dataclass
class RequestContext:
    request_id: str
    method: str = 'UNKNOWN'
    path: str = ''
    started_at: float = field(default_factory=time.time)

    @property
    def elapsed(self) -> float:
        """Seconds since the request arrived"""
        return round(time.time() - self.started_at, 3)


_request_context: ContextVar[RequestContext | None] = ContextVar('_request_context', default=None)


def initialize(request_id: str, method: str = 'UNKNOWN', path: str = '') -> Token[RequestContext | None]:
    set_sentry_tag('request_id', request_id)
    return _request_context.set(RequestContext(request_id=request_id, method=method, path=path))


def reset(token: Token[RequestContext | None]) -> None:
    _request_context.reset(token)


def current() -> RequestContext:
    request_context = _request_context.get()
    if request_context is None:
        raise RuntimeError('Request context not initialized')
    return request_context


def get_request_id() -> str:
    return current().request_id


def get_safe_request_id() -> str | None:
    """
    safely accessible at anypoint in application lifecycle
    """
    request_context = _request_context.get()
    return request_context.request_id if request_context else None
