# Standard library imports
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Local application imports
from ...core.exceptions import ValidationError
from ..constants import UserFields


MAX_AGE = 150

_NAME_LABELS = {
    UserFields.FIRSTNAME: "First name",
    UserFields.LASTNAME: "Last name",
}


def validate_name(value: Any, field: str) -> str:
    """
    Validate a first or last name.

    Returns:
        The trimmed name

    Raises:
        ValidationError: If the value is not a string or is blank
    """
    label = _NAME_LABELS.get(field, field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} cannot be empty", field=field)
    return value.strip()


def validate_age(value: Any) -> int:
    """
    Validate an age: a whole number in (0, MAX_AGE].

    Raises:
        ValidationError: If the value is not an int or out of range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Age must be a whole number", field=UserFields.AGE)
    if value <= 0:
        raise ValidationError("Age must be greater than 0", field=UserFields.AGE)
    if value > MAX_AGE:
        raise ValidationError(
            f"Age must be at most {MAX_AGE} years", field=UserFields.AGE
        )
    return value


def validate_user_id(value: Any) -> str:
    """Return the trimmed user id, raising ValidationError when it is empty."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("User ID cannot be empty", field=UserFields.ID)
    return value.strip()


@dataclass
class User:
    """
    Pure domain model for a user record held by the user API.

    ``id`` is assigned by the server and is present on every listed or
    retrieved record. Records are shown as the server returns them; the
    business rules apply to the input of create and update.
    """
    id: Optional[str]
    firstname: str
    lastname: str
    age: int

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"


@dataclass
class NewUser:
    """User input for creation - validated and trimmed on construction"""
    firstname: str
    lastname: str
    age: int

    def __post_init__(self) -> None:
        """Business validations"""
        self.firstname = validate_name(self.firstname, UserFields.FIRSTNAME)
        self.lastname = validate_name(self.lastname, UserFields.LASTNAME)
        self.age = validate_age(self.age)

    def to_payload(self) -> Dict[str, Any]:
        """Request body for creating this user"""
        return {
            UserFields.FIRSTNAME: self.firstname,
            UserFields.LASTNAME: self.lastname,
            UserFields.AGE: self.age,
        }
