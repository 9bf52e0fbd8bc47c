from .user_provider import UserProvider


__all__ = [
    "UserProvider",
]
