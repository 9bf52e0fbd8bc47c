from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from ...domain.models.user import User


class UserResponse(BaseModel):
    """DTO for a user record returned by the user API"""
    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(min_length=1)
    firstname: StrictStr
    lastname: StrictStr
    age: StrictInt

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_numeric_id(cls, value: Any) -> Any:
        # Integer ids are accepted and converted to strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _reject_blank_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id must not be blank")
        return value

    def to_domain(self) -> User:
        return User(
            id=self.id,
            firstname=self.firstname,
            lastname=self.lastname,
            age=self.age,
        )


class ErrorResponse(BaseModel):
    """DTO for the error body of a failed user API call"""
    message: StrictStr


class NoticeResponse(BaseModel):
    """DTO for the page notice"""
    message: str
    type: str


class UserDraftResponse(BaseModel):
    """DTO for a user form (new user or user being edited)"""
    id: Optional[str] = None
    firstname: str
    lastname: str
    age: int


class UserPageStateResponse(BaseModel):
    """DTO for the full user page state"""
    users: List[UserDraftResponse]
    loading: bool
    notice: Optional[NoticeResponse] = None
    new_user: UserDraftResponse
    editing_user: Optional[UserDraftResponse] = None
    busy: List[str]
