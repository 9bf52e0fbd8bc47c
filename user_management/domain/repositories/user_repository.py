from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Union

from ..models.user import NewUser, User


class UserRepository(ABC):
    """Repository interface - defines contract for user data access"""
    
    @abstractmethod
    async def list_users(self) -> List[User]:
        """List all users"""
        pass
    
    @abstractmethod
    async def create_user(self, user: Union[NewUser, Mapping[str, Any]]) -> str:
        """Create a user and return the success message"""
        pass
    
    @abstractmethod
    async def get_user(self, user_id: str) -> User:
        """Get a single user by ID"""
        pass
    
    @abstractmethod
    async def update_user(self, user_id: str, changes: Mapping[str, Any]) -> str:
        """Apply a partial update and return the success message"""
        pass
    
    @abstractmethod
    async def delete_user(self, user_id: str) -> str:
        """Delete a user and return the success message"""
        pass
