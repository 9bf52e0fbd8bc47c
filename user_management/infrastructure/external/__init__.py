"""External service clients for communicating with external systems"""

from .user_api_client import UserApiClient

__all__ = [
    "UserApiClient",
]
