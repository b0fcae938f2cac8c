"""
User service - request contract for the /users resource (SOLID: Single Responsibility).
Challenge: Validate payloads, call the repository, shape responses and error kinds.
Design: Compatibility mode answers 200 with a zero-valued user on not-found and
failed writes; strict mode raises NotFoundError/ConflictError instead.
"""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from userapi.core.errors import (
    ConflictError,
    InvalidContentTypeError,
    InvalidRequestBodyError,
    MissingFieldsError,
    NotFoundError,
    UserCreateFailedError,
)
from userapi.db.models.user import User
from userapi.db.repositories.user_repository import UserRepository
from userapi.schemas.user import UserPayload, UserResponse

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
# Largest id SQLite can store; bigger path ids match no row
MAX_ID = 2**63 - 1


def _to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def _parse_id(raw_id: str) -> int | None:
    """Path ids that are not plain non-negative integers match no row."""
    if not (raw_id.isascii() and raw_id.isdigit()):
        return None
    user_id = int(raw_id)
    return user_id if user_id <= MAX_ID else None


def _parse_payload(body: bytes) -> UserPayload:
    try:
        return UserPayload.model_validate_json(body)
    except ValidationError as e:
        raise InvalidRequestBodyError() from e


def is_json_content_type(content_type: str | None) -> bool:
    """Media type must be application/json; parameters such as charset are ignored."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_CONTENT_TYPE


class UserService:
    """Handles all user use cases: list, create, get, update, delete."""

    def __init__(self, repo: UserRepository, strict: bool = False):
        self.repo = repo
        self.strict = strict

    async def list_users(self) -> list[UserResponse]:
        users = await self.repo.list_all()
        return [_to_response(u) for u in users]

    async def create(self, content_type: str | None, body: bytes) -> None:
        """Validate and insert. Raises a 400-kind error (409 on conflict, datastore error as-is in strict mode)."""
        if not is_json_content_type(content_type):
            logger.warning("Invalid content type: %s", content_type)
            raise InvalidContentTypeError()

        try:
            payload = _parse_payload(body)
        except InvalidRequestBodyError as e:
            logger.warning("Invalid request body: %s", e.__cause__)
            raise

        if not payload.has_all_fields():
            logger.warning("All fields are required")
            raise MissingFieldsError()

        user = User(name=payload.name, email=payload.email, password=payload.password)
        try:
            user = await self.repo.add(user)
        except ConflictError as e:
            logger.error("Failed to create user: %s", e.__cause__)
            if self.strict:
                raise
            raise UserCreateFailedError() from e
        except SQLAlchemyError as e:
            logger.error("Failed to create user: %s", e)
            if self.strict:
                raise
            raise UserCreateFailedError() from e
        logger.info("User created", extra={"user_id": user.id})

    async def get(self, raw_id: str) -> UserResponse:
        user_id = _parse_id(raw_id)
        try:
            if user_id is None:
                raise NotFoundError("User not found")
            user = await self.repo.get_by_id(user_id)
        except NotFoundError:
            logger.warning("Failed to fetch user by ID: %s", raw_id)
            if self.strict:
                raise
            return UserResponse()
        except SQLAlchemyError as e:
            logger.error("Failed to fetch user by ID %s: %s", raw_id, e)
            if self.strict:
                raise
            return UserResponse()
        logger.info("User fetched by ID", extra={"user_id": user.id})
        return _to_response(user)

    async def update(self, raw_id: str, body: bytes) -> UserResponse:
        """Apply name and email. A missing row is replaced by an empty base user that gets inserted."""
        try:
            payload = _parse_payload(body)
        except InvalidRequestBodyError as e:
            logger.warning("Error binding JSON: %s", e.__cause__)
            if self.strict:
                raise
            return UserResponse()

        try:
            user = await self._save(raw_id, payload)
        except (NotFoundError, ConflictError) as e:
            logger.error("Failed to update user %s: %s", raw_id, e.message)
            if self.strict:
                raise
            return UserResponse()
        except SQLAlchemyError as e:
            logger.error("Failed to update user %s: %s", raw_id, e)
            if self.strict:
                raise
            return UserResponse()

        logger.info("User updated", extra={"user_id": user.id})
        return _to_response(user)

    async def _save(self, raw_id: str, payload: UserPayload) -> User:
        user_id = _parse_id(raw_id)
        try:
            if user_id is None:
                raise NotFoundError("User not found")
            return await self.repo.update(user_id, payload.name, payload.email)
        except NotFoundError:
            if self.strict:
                raise
        # Empty base user: saving it inserts a fresh row
        logger.warning("User %s not found; saving as a new user", raw_id)
        return await self.repo.add(User(name=payload.name, email=payload.email, password=""))

    async def delete(self, raw_id: str) -> None:
        """Soft delete. Outside strict mode failures are only logged."""
        user_id = _parse_id(raw_id)
        try:
            if user_id is None:
                raise NotFoundError("User not found")
            await self.repo.soft_delete(user_id)
        except NotFoundError:
            logger.warning("Failed to delete user: %s not found", raw_id)
            if self.strict:
                raise
            return
        except SQLAlchemyError as e:
            logger.error("Failed to delete user %s: %s", raw_id, e)
            if self.strict:
                raise
            return
        logger.info("User deleted", extra={"user_id": user_id})
