"""Constants for domain model field names"""

from .user_fields import UserFields, OperationKeys

__all__ = [
    "UserFields",
    "OperationKeys",
]
