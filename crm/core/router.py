from fastapi import APIRouter

from crm.core.customer.router import router as customer_router

api_router = APIRouter()

api_router.include_router(customer_router, prefix='/customer', tags=['customer'])
