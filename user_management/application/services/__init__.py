from .user_page import UserDraft, UserPage, UserPageState, parse_age_input

__all__ = ["UserDraft", "UserPage", "UserPageState", "parse_age_input"]
