from .user_dto import (
    ErrorResponse,
    NoticeResponse,
    UserDraftResponse,
    UserPageStateResponse,
    UserResponse,
)

__all__ = [
    "ErrorResponse",
    "NoticeResponse",
    "UserDraftResponse",
    "UserPageStateResponse",
    "UserResponse",
]
