# inzozi/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from inzozi.adapters.inbound.api.v1.endpoints import (
    auth_endpoint,
    user_management_endpoint,
)

api_router = APIRouter()

api_router.include_router(auth_endpoint.router)
api_router.include_router(user_management_endpoint.router)
