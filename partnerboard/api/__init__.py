"""
Partnerboard API package initialization.

This package contains FastAPI router modules:
- partners: Dashboard refresh, filtered/sorted views, categories, partner detail
- auth: Password policy and email MFA code issuance
"""

from fastapi import APIRouter

from partnerboard.api.partners import router as partners_router
from partnerboard.api.auth import router as auth_router

# Main API router
api_router = APIRouter()

api_router.include_router(partners_router, tags=["partners"])  # Has its own /partners prefix
api_router.include_router(auth_router, tags=["auth"])  # Has its own /auth prefix

__all__ = [
    "api_router",
    "partners_router",
    "auth_router",
]
