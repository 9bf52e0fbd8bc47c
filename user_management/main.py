# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

# Local application imports
from .api.v1 import user_page_router
from .application.services.user_page import UserPage
from .core.config import get_settings
from .di.container import get_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Checks the user API configuration on startup and stops the page's
    pending notice timer on shutdown.
    """
    settings = get_settings()
    settings.check_user_api_base_url()
    logger.info(f"User API base URL: {settings.user_api_base_url or '<not set>'}")

    yield

    try:
        get_container().get(UserPage).close()
    except ValueError:
        logger.warning("User page not registered, nothing to close")
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - CORS middleware configuration
    - User page route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    # Create FastAPI app
    application = FastAPI(
        title="User Management Web",
        version="1.0.0",
        description="User management page backed by a remote user API",
        lifespan=lifespan
    )

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    application.include_router(user_page_router, prefix="/users")

    @application.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        return RedirectResponse(url="/users/")

    return application


# Create application instance
app = create_application()
