# Local application imports
from ...application.services.user_page import UserPage
from ...di.container import get_container


def get_user_page() -> UserPage:
    """
    FastAPI dependency returning the shared user page state container
    
    Returns:
        UserPage registered in the DI container
    """
    container = get_container()
    return container.get(UserPage)
