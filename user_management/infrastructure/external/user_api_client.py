# Standard library imports
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

# External package imports
import httpx
from pydantic import ValidationError as PydanticValidationError

# Local application imports
from .base_api_client import BaseApiClient
from ...application.dto.user_dto import ErrorResponse, UserResponse
from ...core.exceptions import (
    ConfigurationError,
    HttpError,
    InvalidResponseFormat,
    NetworkError,
    ValidationError,
)
from ...domain.constants import UserFields
from ...domain.models.user import (
    NewUser,
    User,
    validate_age,
    validate_name,
    validate_user_id,
)
from ...domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserApiClient(BaseApiClient, UserRepository):
    """
    HTTP client for the remote user API.

    Every operation is a single request against the configured base URL.
    Input is validated before anything is sent, and every failure is raised
    as a UserServiceError subclass:

    - ValidationError: input rejected locally, no request was made
    - HttpError: non-2xx response (message taken from the error body when
      it has a ``message`` string, otherwise derived from the status)
    - InvalidResponseFormat: 2xx response whose body has the wrong shape
    - NetworkError: the request could not complete
    - ConfigurationError: no base URL configured
    """

    async def list_users(self) -> List[User]:
        """
        List all users.

        Entries that do not match the user shape are dropped; the remaining
        entries keep their original order.

        Raises:
            InvalidResponseFormat: If the body is not a JSON array
        """
        logger.info(f"Fetching all users from {self.base_url}")
        body = await self._request("GET", self.base_url, "Failed to load users")

        if not isinstance(body, list):
            raise InvalidResponseFormat(
                "Unexpected response format from user API: expected a list of users"
            )

        users: List[User] = []
        for index, entry in enumerate(body):
            try:
                users.append(UserResponse.model_validate(entry).to_domain())
            except PydanticValidationError as e:
                logger.warning(
                    f"Dropping malformed user entry at index {index}: "
                    f"{e.error_count()} validation error(s)"
                )

        logger.info(f"Fetched {len(users)} of {len(body)} user(s)")
        return users

    async def create_user(self, user: Union[NewUser, Mapping[str, Any]]) -> str:
        """
        Create a user.

        Args:
            user: NewUser, or a mapping with firstname, lastname and age

        Returns:
            Success message from the server

        Raises:
            ValidationError: If a name is blank or the age is out of range
        """
        if not isinstance(user, NewUser):
            user = NewUser(
                firstname=user.get(UserFields.FIRSTNAME),
                lastname=user.get(UserFields.LASTNAME),
                age=user.get(UserFields.AGE),
            )

        logger.info(f"Creating user {user.firstname} {user.lastname}")
        body = await self._request(
            "POST", self.base_url, "Failed to add user", payload=user.to_payload()
        )
        return self._success_message(body)

    async def get_user(self, user_id: str) -> User:
        """
        Get a single user.

        Raises:
            ValidationError: If user_id is empty
            InvalidResponseFormat: If the body is not a user record
        """
        user_id = validate_user_id(user_id)

        logger.info(f"Fetching user {user_id}")
        body = await self._request("GET", self._user_url(user_id), "Failed to load user")

        try:
            return UserResponse.model_validate(body).to_domain()
        except PydanticValidationError as e:
            logger.error(f"User API returned a malformed record for user {user_id}: {e}")
            raise InvalidResponseFormat(
                "Unexpected response format from user API: expected a user record"
            ) from e

    async def update_user(self, user_id: str, changes: Mapping[str, Any]) -> str:
        """
        Apply a partial update.

        Only the supplied fields are sent, each validated on its own. An
        ``id`` key is ignored and None values count as not supplied, so an
        empty change set sends ``{}``.

        Returns:
            Success message from the server

        Raises:
            ValidationError: If user_id is empty, a supplied field is invalid
                or a field is unknown
        """
        user_id = validate_user_id(user_id)
        payload = self._build_patch(changes)

        logger.info(f"Updating user {user_id} fields {sorted(payload)}")
        body = await self._request(
            "PATCH", self._user_url(user_id), "Failed to update user", payload=payload
        )
        return self._success_message(body)

    async def delete_user(self, user_id: str) -> str:
        """
        Delete a user.

        Returns:
            Success message from the server

        Raises:
            ValidationError: If user_id is empty
        """
        user_id = validate_user_id(user_id)

        logger.info(f"Deleting user {user_id}")
        body = await self._request("DELETE", self._user_url(user_id), "Failed to delete user")
        return self._success_message(body)

    def _user_url(self, user_id: str) -> str:
        return f"{self.base_url}/{quote(user_id, safe='')}"

    @staticmethod
    def _build_patch(changes: Mapping[str, Any]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for field, value in changes.items():
            if field == UserFields.ID or value is None:
                continue
            if field in (UserFields.FIRSTNAME, UserFields.LASTNAME):
                payload[field] = validate_name(value, field)
            elif field == UserFields.AGE:
                payload[field] = validate_age(value)
            else:
                raise ValidationError(f"Unknown user field: {field}", field=field)
        return payload

    async def _request(
        self,
        method: str,
        url: str,
        fallback_message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the parsed body.

        JSON content types are decoded, any other body is returned as text.
        """
        try:
            async with self._client() as client:
                response = await client.request(method, url, json=payload)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid user API URL {url!r}: {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout during {method} {url}")
            raise NetworkError("Network error: request to the user API timed out") from e
        except httpx.TransportError as e:
            logger.error(f"Network error during {method} {url}: {e!r}")
            raise NetworkError(
                f"Network error: could not connect to the user API ({e.__class__.__name__})"
            ) from e

        if not response.is_success:
            error = self._http_error(response, fallback_message)
            logger.error(f"{method} {url} failed: {error.status_code} - {error.message}")
            raise error

        if not self._is_json(response):
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseFormat(
                "Unexpected response format from user API: malformed JSON body"
            ) from e

    @staticmethod
    def _is_json(response: httpx.Response) -> bool:
        media_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        return media_type == "application/json" or media_type.endswith("+json")

    @staticmethod
    def _http_error(response: httpx.Response, fallback_message: str) -> HttpError:
        try:
            body = ErrorResponse.model_validate(response.json())
            message = body.message.strip()
        except ValueError:
            message = ""
        if not message:
            status = f"HTTP {response.status_code} {response.reason_phrase}".strip()
            message = f"{fallback_message} ({status})"
        return HttpError(message, status_code=response.status_code)

    @staticmethod
    def _success_message(body: Any) -> str:
        if body is None:
            return ""
        if isinstance(body, str):
            return body
        if isinstance(body, dict) and isinstance(body.get(UserFields.MESSAGE), str):
            return body[UserFields.MESSAGE]
        return json.dumps(body)
