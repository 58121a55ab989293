from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pymongo.errors import PyMongoError
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.errors import ServerErrorMiddleware

from crm import settings
from crm.common.exceptions import (
    APIException,
    InternalException,
    api_exception_handler,
    database_exception_handler,
    inbound_validation_exception_handler,
    internal_exception_handler,
    unhandled_exception_handler,
)
from crm.common.request import RequestResponseMiddleware
from crm.network.http.router import api_router

# Load balancer probes would otherwise eat the whole trace budget
UNTRACED_PATHS = {'/healthcheck/api', '/healthcheck/database'}

# Most specific first, Exception is the catch all
EXCEPTION_HANDLERS = (
    (RequestValidationError, inbound_validation_exception_handler),
    (APIException, api_exception_handler),
    (InternalException, internal_exception_handler),
    (PyMongoError, database_exception_handler),
    (Exception, unhandled_exception_handler),
)


def traces_sampler(sampling_context: dict) -> float:
    asgi_scope = sampling_context.get('asgi_scope') or {}
    if asgi_scope.get('path') in UNTRACED_PATHS:
        return 0
    return settings.SENTRY_DEFAULT_SAMPLE_RATE


def configure_sentry() -> None:
    if settings.USE_MOCK_SENTRY_CLIENT:
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        # Client errors are answered, not reported
        ignore_errors=[APIException],
        integrations=[StarletteIntegration(), FastApiIntegration()],
        traces_sampler=traces_sampler,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'{app.title} is ready!')
    if settings.IS_LOCAL:
        logger.info(f'check out API docs here: {settings.HOST}/docs')
    yield

    from crm import setup

    setup.teardown()
    logger.info('💀 Shutting down!')


configure_sentry()

server = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version='0.1.0',
    lifespan=lifespan,
    redirect_slashes=False,
    generate_unique_id_function=lambda route: route.name,
    openapi_url=f'{settings.API_PREFIX}/openapi.json' if settings.IS_LOCAL else None,
    docs_url='/docs' if settings.IS_LOCAL else None,
    redoc_url=None,
)

for exception_class, handler in EXCEPTION_HANDLERS:
    server.add_exception_handler(exception_class, handler)

# add_middleware inserts at the front, so the last one added runs first
server.add_middleware(RequestResponseMiddleware)
if settings.DEBUG:
    # Tracebacks in the browser
    server.add_middleware(ServerErrorMiddleware, debug=True)
if settings.BACKEND_CORS_ORIGINS:
    server.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOWED_METHODS,
        allow_headers=settings.CORS_ALLOWED_HEADERS,
        expose_headers=['X-Request-ID'],
    )

server.include_router(api_router, prefix=settings.API_PREFIX)
