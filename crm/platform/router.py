from fastapi import APIRouter

from crm.platform.healthcheck import router as healthcheck
from crm.platform.version import router as version

api_router = APIRouter()
api_router.include_router(healthcheck.router, prefix='/healthcheck', tags=['healthcheck'])
api_router.include_router(version.router, prefix='/version', tags=['version'])
