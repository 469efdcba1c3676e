from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from userservice.domain.users.entities import MAX_PAGE_LIMIT, User, UserFilter


class UserPayloadDTO(BaseModel):
    """Body of both create and update requests."""

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    nickname: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    country: str = Field(min_length=1, max_length=255)

    def to_domain(self, user_id: UUID | None = None) -> User:
        return User(
            id=user_id,
            first_name=self.first_name,
            last_name=self.last_name,
            nickname=self.nickname,
            password=self.password,
            email=self.email,
            country=self.country,
        )


class ListUsersQueryDTO(BaseModel):
    previous_page: str | None = None
    next_page: str | None = None
    nickname: str | None = None
    country: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    limit: int = Field(0, ge=0, le=MAX_PAGE_LIMIT)

    def to_domain(self) -> UserFilter:
        return UserFilter(
            country=self.country,
            first_name=self.first_name,
            last_name=self.last_name,
            nickname=self.nickname,
            previous_page=self.previous_page,
            next_page=self.next_page,
            limit=self.limit,
        )


class UserDTO(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    nickname: str
    # Returned verbatim; clients already depend on it.
    password: str
    email: str
    country: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserPageDTO(BaseModel):
    users: list[UserDTO]
    previous_page: str | None = None
    next_page: str | None = None
    total: int

    model_config = ConfigDict(from_attributes=True)


class OkDTO(BaseModel):
    ok: bool = True
