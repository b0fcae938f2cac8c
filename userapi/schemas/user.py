"""User request/response schemas - API contract."""

from pydantic import BaseModel


class UserPayload(BaseModel):
    """Inbound body for create and update. Absent fields stay empty; unknown keys are ignored."""

    name: str = ""
    email: str = ""
    password: str = ""

    def has_all_fields(self) -> bool:
        return bool(self.name and self.email and self.password)


class UserResponse(BaseModel):
    """Outbound view of a user. The zero value doubles as the not-found answer."""

    id: int = 0
    name: str = ""
    email: str = ""

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
