"""
User CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Challenge: Exact error strings and status codes of the public contract.
Design: Thin controller; bodies are read raw so the service decides what "invalid" means.
"""

from fastapi import APIRouter, Request

from userapi.db.session import DbSession
from userapi.db.repositories.user_repository import UserRepository
from userapi.schemas.user import MessageResponse, UserResponse
from userapi.services.user_service import UserService

router = APIRouter()


def _get_user_service(request: Request, session: DbSession) -> UserService:
    """Factory for service with repository injection (Dependency Inversion)."""
    settings = request.app.state.settings
    return UserService(UserRepository(session), strict=settings.strict_status_codes)


@router.get("", response_model=list[UserResponse])
async def list_users(request: Request, session: DbSession):
    """List every live user. Never includes passwords."""
    svc = _get_user_service(request, session)
    return await svc.list_users()


@router.post("", response_model=MessageResponse)
async def create_user(request: Request, session: DbSession):
    """Create user from a JSON body. The new id is not returned."""
    svc = _get_user_service(request, session)
    await svc.create(request.headers.get("content-type"), await request.body())
    return MessageResponse(message="User created")


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(request: Request, session: DbSession, user_id: str):
    """Get single user; zero-valued body when not found (404 in strict mode)."""
    svc = _get_user_service(request, session)
    return await svc.get(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(request: Request, session: DbSession, user_id: str):
    """Update name and email only."""
    svc = _get_user_service(request, session)
    return await svc.update(user_id, await request.body())


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(request: Request, session: DbSession, user_id: str):
    """Soft delete. Answers the same message whether or not a row was removed."""
    svc = _get_user_service(request, session)
    await svc.delete(user_id)
    return MessageResponse(message="User deleted")
