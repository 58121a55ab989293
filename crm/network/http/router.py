from fastapi import APIRouter

from crm.core.router import api_router as core_router
from crm.platform.router import api_router as platform_router

api_router = APIRouter()
api_router.include_router(platform_router)
api_router.include_router(core_router, prefix='/api')
