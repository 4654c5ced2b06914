"""Authentication schemas: login, registration and the current viewer."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request body for logging in.

    A blank or missing username selects the shared captain password.
    """

    username: str | None = None
    password: str = ""


class RegisterRequest(BaseModel):
    """Request body for contributor self-registration."""

    invite_code: str = Field(default="", alias="inviteCode")
    username: str = ""
    display_name: str | None = Field(default=None, alias="displayName")
    password: str = ""

    model_config = ConfigDict(populate_by_name=True)


class LoginOut(BaseModel):
    ok: bool = True
    role: str
    user_name: str = Field(serialization_alias="userName")


class MeOut(BaseModel):
    """The viewer carried by the session cookie."""

    role: str
    user_name: str | None = Field(default=None, serialization_alias="userName")
    user_id: UUID | None = Field(default=None, serialization_alias="userId")
