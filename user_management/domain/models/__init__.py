from .user import (
    MAX_AGE,
    NewUser,
    User,
    validate_age,
    validate_name,
    validate_user_id,
)

__all__ = [
    "MAX_AGE",
    "NewUser",
    "User",
    "validate_age",
    "validate_name",
    "validate_user_id",
]
