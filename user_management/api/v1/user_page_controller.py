# Standard library imports
from pathlib import Path
from urllib.parse import quote

# External package imports
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

# Local application imports
from ...application.dto.user_dto import UserPageStateResponse
from ...application.services.user_page import UserPage
from ...core.exceptions import Severity
from ...domain.constants import OperationKeys, UserFields
from ...domain.models.user import MAX_AGE
from .dependencies import get_user_page


router = APIRouter(tags=["users"])

TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates"

templates = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def quote_user_id(user_id: str) -> str:
    """Percent-encode a user id as a single path segment"""
    return quote(user_id, safe="")


templates.filters["quote_id"] = quote_user_id


def _back_to_page(request: Request) -> RedirectResponse:
    """Post/redirect/get back to the user page"""
    return RedirectResponse(
        url=str(request.url_for("show_user_page")),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/", response_class=HTMLResponse, name="show_user_page")
async def show_user_page(
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> HTMLResponse:
    """
    Render the user management page

    The first visit loads the user list.
    """
    await page.mount()
    template = templates.get_template("user_page.html")
    html = template.render(
        request=request,
        page=page,
        state=page.state,
        keys=OperationKeys,
        severity=Severity,
        max_age=MAX_AGE,
    )
    return HTMLResponse(content=html)


@router.get("/state", response_model=UserPageStateResponse)
async def get_page_state(
    page: UserPage = Depends(get_user_page),
) -> UserPageStateResponse:
    """
    Get the current page state as JSON

    Returns:
        UserPageStateResponse with users, notice, forms and busy operations
    """
    await page.mount()
    return page.snapshot()


@router.post("/create")
async def create_user(
    request: Request,
    firstname: str = Form(""),
    lastname: str = Form(""),
    age: str = Form(""),
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Submit the new user form"""
    page.set_new_user_field(UserFields.FIRSTNAME, firstname)
    page.set_new_user_field(UserFields.LASTNAME, lastname)
    page.set_new_user_field(UserFields.AGE, age)
    await page.create_user()
    return _back_to_page(request)


@router.post("/edit/cancel")
async def cancel_edit(
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Close the edit form"""
    page.cancel_edit()
    return _back_to_page(request)


@router.post("/refresh")
async def refresh_users(
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Reload the user list without the loading screen"""
    await page.load_users(show_loading=False)
    return _back_to_page(request)


@router.post("/retry")
async def retry(
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Retry loading after a failed first load"""
    await page.retry()
    return _back_to_page(request)


@router.post("/notice/dismiss")
async def dismiss_notice(
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Close the notice banner"""
    page.dismiss_notice()
    return _back_to_page(request)


@router.post("/{user_id:path}/edit")
async def start_edit(
    user_id: str,
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """Open the edit form for a listed user"""
    page.start_edit(user_id)
    return _back_to_page(request)


@router.post("/{user_id:path}/update")
async def update_user(
    user_id: str,
    request: Request,
    firstname: str = Form(""),
    lastname: str = Form(""),
    age: str = Form(""),
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """
    Submit the edit form

    Ignored unless user_id is the user currently being edited.
    """
    editing = page.state.editing_user
    if editing is not None and editing.id == user_id:
        page.set_editing_field(UserFields.FIRSTNAME, firstname)
        page.set_editing_field(UserFields.LASTNAME, lastname)
        page.set_editing_field(UserFields.AGE, age)
        await page.update_user()
    return _back_to_page(request)


@router.post("/{user_id:path}/delete")
async def delete_user(
    user_id: str,
    request: Request,
    page: UserPage = Depends(get_user_page),
) -> RedirectResponse:
    """
    Delete a user

    The page asks for confirmation in the browser before posting here.
    """
    await page.delete_user(user_id)
    return _back_to_page(request)
