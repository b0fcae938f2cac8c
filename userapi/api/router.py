"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from userapi.api.endpoints import frontend, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(frontend.router, tags=["frontend"])
