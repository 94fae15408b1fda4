"""Main v1 router aggregator"""
from fastapi import APIRouter

from vasooly.api.v1 import bills, splits

# Create v1 router
api_router = APIRouter()

# Include all v1 routers
api_router.include_router(splits.router)
api_router.include_router(bills.router)
