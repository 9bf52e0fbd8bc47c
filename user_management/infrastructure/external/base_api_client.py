# Standard library imports
import logging
from typing import Optional

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ...core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BaseApiClient:
    """
    Base class for user API clients.
    
    Provides common initialization for base_url, timeout and transport.
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base API client.
        
        Args:
            base_url: Base URL of the user API. If None, reads from env.
            timeout: Request timeout in seconds. If None, reads from env
                (unset means no timeout).
            transport: Optional httpx transport used for every request.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.user_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.user_api_timeout
        self.transport = transport
    
    def _client(self) -> httpx.AsyncClient:
        """Create a per-call async HTTP client."""
        if not self.base_url:
            raise ConfigurationError("User API base URL is not configured")
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
