from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.user_repository import UserRepository
from ...application.services.user_page import UserPage
from ...infrastructure.external.user_api_client import UserApiClient

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class UserProvider:
    """User provider - registers the user API client and the user page"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the user API client and the page state container.
        Both are singletons: the page state is shared by every request.
        """
        # Register UserApiClient as the UserRepository implementation
        try:
            container.get(UserRepository)
        except ValueError:
            container.register_singleton(UserRepository, UserApiClient())
        
        # Register UserPage
        try:
            container.get(UserPage)
        except ValueError:
            settings = get_settings()
            container.register_singleton(
                UserPage,
                UserPage(
                    repository=container.get(UserRepository),
                    notice_auto_clear_seconds=settings.notice_auto_clear_seconds,
                ),
            )
