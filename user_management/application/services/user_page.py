"""User page state and the handlers that drive it."""
import asyncio
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Set

from ...core.exceptions import (
    Notice,
    Severity,
    ValidationError,
    describe_error,
)
from ...domain.constants import OperationKeys, UserFields
from ...domain.models.user import MAX_AGE, User
from ...domain.repositories.user_repository import UserRepository
from ..dto.user_dto import (
    NoticeResponse,
    UserDraftResponse,
    UserPageStateResponse,
)

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No users in the database yet"
CREATED_MESSAGE = "User added successfully"
UPDATED_MESSAGE = "User updated successfully"
DELETED_MESSAGE = "User deleted successfully"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_age_input(value: Any) -> int:
    """
    Parse the age form field like a number input: leading integer wins,
    anything unparseable is 0 and negatives are clamped to 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        return max(0, int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return max(0, int(match.group(1)))
    return 0


@dataclass
class UserDraft:
    """Form values for a new user or the user being edited"""
    firstname: str = ""
    lastname: str = ""
    age: int = 0
    id: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserDraft":
        return cls(
            id=user.id,
            firstname=user.firstname,
            lastname=user.lastname,
            age=user.age,
        )

    def fields(self) -> Dict[str, Any]:
        """Editable fields, without the id"""
        return {
            UserFields.FIRSTNAME: self.firstname,
            UserFields.LASTNAME: self.lastname,
            UserFields.AGE: self.age,
        }

    def set_field(self, name: str, value: Any) -> None:
        if name == UserFields.AGE:
            self.age = parse_age_input(value)
        elif name in (UserFields.FIRSTNAME, UserFields.LASTNAME):
            setattr(self, name, "" if value is None else str(value))
        else:
            raise ValidationError(f"Unknown user field: {name}", field=name)


@dataclass
class UserPageState:
    """Everything the user page renders"""
    users: List[User] = field(default_factory=list)
    loading: bool = True
    notice: Optional[Notice] = None
    new_user: UserDraft = field(default_factory=UserDraft)
    editing_user: Optional[UserDraft] = None
    busy: Set[str] = field(default_factory=set)
    mounted: bool = False


class UserPage:
    """
    State container for the user management page.

    Handlers call the user repository, then update the state the view
    renders from. Each mutating operation marks its own busy key
    (``create``, ``delete-{id}``, ``update-{id}``) so only the matching
    control is disabled while it runs; a second call with the same key is
    ignored. Nothing is cancelled, so when calls race the last one to
    settle wins.
    """

    def __init__(
        self,
        repository: UserRepository,
        notice_auto_clear_seconds: float = 5.0,
    ) -> None:
        self.repository = repository
        self.notice_auto_clear_seconds = notice_auto_clear_seconds
        self.state = UserPageState()
        self._notice_timer: Optional[asyncio.TimerHandle] = None

    # ------------------------------------------------------------------
    # View helpers
    # ------------------------------------------------------------------

    def is_busy(self, key: str) -> bool:
        return key in self.state.busy

    @property
    def any_busy(self) -> bool:
        return bool(self.state.busy)

    @property
    def show_error_screen(self) -> bool:
        """Full-page error with retry: a hard error and nothing to list."""
        notice = self.state.notice
        return (
            notice is not None
            and notice.severity == Severity.ERROR
            and not self.state.users
        )

    def find_user(self, user_id: str) -> Optional[User]:
        return next((user for user in self.state.users if user.id == user_id), None)

    def delete_prompt(self, user_id: str) -> str:
        user = self.find_user(user_id)
        name = user.full_name if user else "this user"
        return f"Are you sure you want to delete {name}?"

    def snapshot(self) -> UserPageStateResponse:
        """Serializable copy of the current state"""
        state = self.state
        notice = None
        if state.notice is not None:
            notice = NoticeResponse(
                message=state.notice.message,
                type=state.notice.severity.value,
            )
        editing = None
        if state.editing_user is not None:
            editing = UserDraftResponse(**vars(state.editing_user))
        return UserPageStateResponse(
            users=[UserDraftResponse(**vars(user)) for user in state.users],
            loading=state.loading,
            notice=notice,
            new_user=UserDraftResponse(**vars(state.new_user)),
            editing_user=editing,
            busy=sorted(state.busy),
        )

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    def set_notice(self, notice: Optional[Notice], auto_clear: bool = False) -> None:
        """Replace the notice; a pending auto-clear of the old one is cancelled."""
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None
        self.state.notice = notice

        if not auto_clear or notice is None or notice.severity == Severity.ERROR:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._notice_timer = loop.call_later(
            self.notice_auto_clear_seconds, self._expire_notice, notice
        )

    def _expire_notice(self, notice: Notice) -> None:
        self._notice_timer = None
        if self.state.notice is notice:
            self.state.notice = None

    def dismiss_notice(self) -> None:
        self.set_notice(None)

    def handle_error(self, error: Any, operation: str) -> Notice:
        """Log a failed operation and show it as a notice."""
        logger.error(f"Error in {operation}: {error}")
        notice = describe_error(error)
        self.set_notice(notice, auto_clear=True)
        return notice

    def close(self) -> None:
        """Cancel the pending notice timer."""
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def mount(self) -> None:
        """Load users the first time the page is shown."""
        if self.state.mounted:
            return
        self.state.mounted = True
        await self.load_users()

    async def load_users(self, show_loading: bool = True, keep_notice: bool = False) -> None:
        """
        Replace the user list with a fresh copy from the server.

        Args:
            show_loading: Show the full-page loading state while fetching
            keep_notice: Leave the current notice in place (used to reconcile
                after a failed mutation)
        """
        try:
            if show_loading:
                self.state.loading = True
            if not keep_notice:
                self.set_notice(None)

            users = await self.repository.list_users()
            self.state.users = users

            if not users and not keep_notice:
                self.set_notice(Notice(EMPTY_LIST_MESSAGE, Severity.INFO))
        except Exception as e:
            if keep_notice:
                logger.error(f"Could not refresh users after a failed operation: {e}")
            else:
                self.handle_error(e, "load_users")
        finally:
            if show_loading:
                self.state.loading = False

    async def retry(self) -> None:
        self.set_notice(None)
        await self.load_users()

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def set_new_user_field(self, name: str, value: Any) -> None:
        self.state.new_user.set_field(name, value)

    def set_editing_field(self, name: str, value: Any) -> None:
        if self.state.editing_user is None:
            return
        self.state.editing_user.set_field(name, value)

    def validate_user(self, draft: UserDraft) -> bool:
        """
        Check a form before it is submitted.

        Shows the first failed rule as a warning and returns False.
        """
        message = None
        if not draft.firstname.strip():
            message = "First name cannot be empty"
        elif not draft.lastname.strip():
            message = "Last name cannot be empty"
        elif draft.age <= 0:
            message = "Age must be greater than 0"
        elif draft.age > MAX_AGE:
            message = f"Age must be at most {MAX_AGE} years"

        if message is None:
            return True
        self.set_notice(Notice(message, Severity.WARNING))
        return False

    def start_edit(self, user_id: str) -> bool:
        user = self.find_user(user_id)
        if user is None:
            logger.warning(f"Cannot edit user {user_id}: not in the current list")
            return False
        self.state.editing_user = UserDraft.from_user(user)
        self.set_notice(None)
        return True

    def cancel_edit(self) -> None:
        self.state.editing_user = None
        self.set_notice(None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_user(self) -> None:
        draft = self.state.new_user
        if not self.validate_user(draft):
            return
        if self.is_busy(OperationKeys.CREATE):
            logger.info("Create already in progress, ignoring submit")
            return

        self.state.busy.add(OperationKeys.CREATE)
        try:
            self.set_notice(None)
            message = await self.repository.create_user(draft.fields())
            self.set_notice(Notice(message or CREATED_MESSAGE, Severity.INFO))
            await self.load_users(show_loading=False, keep_notice=True)
            self.state.new_user = UserDraft()
        except Exception as e:
            self.handle_error(e, "create_user")
            await self.load_users(show_loading=False, keep_notice=True)
        finally:
            self.state.busy.discard(OperationKeys.CREATE)

    async def delete_user(
        self,
        user_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> None:
        """
        Delete a user after optional confirmation.

        Args:
            user_id: ID of the user to delete
            confirm: Called with delete_prompt(user_id); a false answer
                cancels the delete
        """
        if confirm is not None and not confirm(self.delete_prompt(user_id)):
            return
        key = OperationKeys.delete(user_id)
        if self.is_busy(key):
            logger.info(f"Delete of user {user_id} already in progress")
            return

        self.state.busy.add(key)
        try:
            self.set_notice(None)
            message = await self.repository.delete_user(user_id)
            self.set_notice(Notice(message or DELETED_MESSAGE, Severity.INFO))

            self.state.users = [user for user in self.state.users if user.id != user_id]
            editing = self.state.editing_user
            if editing is not None and editing.id == user_id:
                self.state.editing_user = None
        except Exception as e:
            self.handle_error(e, "delete_user")
            await self.load_users(show_loading=False, keep_notice=True)
        finally:
            self.state.busy.discard(key)

    async def update_user(self) -> None:
        editing = self.state.editing_user
        if editing is None or not self.validate_user(editing):
            return
        user_id = editing.id or ""
        key = OperationKeys.update(user_id)
        if self.is_busy(key):
            logger.info(f"Update of user {user_id} already in progress")
            return

        submitted = replace(editing)
        self.state.busy.add(key)
        try:
            self.set_notice(None)
            message = await self.repository.update_user(user_id, submitted.fields())
            self.set_notice(Notice(message or UPDATED_MESSAGE, Severity.INFO))

            updated = User(
                id=user_id,
                firstname=submitted.firstname.strip(),
                lastname=submitted.lastname.strip(),
                age=submitted.age,
            )
            self.state.users = [
                updated if user.id == user_id else user for user in self.state.users
            ]
            current = self.state.editing_user
            if current is not None and current.id == user_id:
                self.state.editing_user = None
        except Exception as e:
            self.handle_error(e, "update_user")
            await self.load_users(show_loading=False, keep_notice=True)
        finally:
            self.state.busy.discard(key)
