from .user_page_controller import router as user_page_router


__all__ = ["user_page_router"]
