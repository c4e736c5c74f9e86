"""
Demo Router - login flow built on LazySession.

Illustrates the accessor end to end: a CSRF-protected login form, flash
messages that survive exactly one redirect, and logout via clear().

Accounts:
- demo / demo: normal user (level 1)
- admin / admin: administrator (level 2)
"""

import logging
import secrets

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from src.api.deps import get_session
from src.models.requests import LoginRequest
from src.models.responses import FlashMessage, HomeResponse
from src.sessions.accessor import LazySession


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Demo"])

SUCCESS_COLOR = "#0a6d19"
ERROR_COLOR = "#990a22"
INFO_COLOR = "#216baf"

# username -> (password, user_level)
DEMO_ACCOUNTS: dict[str, tuple[str, int]] = {
    "demo": ("demo", 1),
    "admin": ("admin", 2),
}


def flash_message(session: LazySession, text: str, color: str) -> None:
    """Flash a banner message for the next request."""
    session.flash.put("message", text)
    session.flash.put("message-bgcolor", color)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/",
    response_model=HomeResponse,
    summary="Home page state",
)
async def home(session: LazySession = Depends(get_session)) -> HomeResponse:
    """
    Show the flash message (consumed on read) and either the logged-in user
    or a CSRF token for the login form.
    """
    message = None
    if session.flash.has("message"):
        message = FlashMessage(
            text=session.flash.get("message"),
            color=session.flash.get("message-bgcolor"),
        )

    if session.get("logged_in") is True:
        return HomeResponse(
            logged_in=True,
            username=session["username"],
            user_level=session["user_level"],
            message=message,
        )

    return HomeResponse(
        logged_in=False,
        csrf_token=session.csrf.get_token(),
        message=message,
    )


@router.post("/login", summary="Log in")
async def login(
    request: LoginRequest,
    session: LazySession = Depends(get_session),
) -> RedirectResponse:
    if not session.csrf.validate_token(request.csrf_token):
        flash_message(
            session,
            "The access token is not valid. Are you attempting something?",
            ERROR_COLOR,
        )
        return _redirect_home()

    account = DEMO_ACCOUNTS.get(request.username)
    if account is None or not secrets.compare_digest(
        account[0].encode("utf-8"), request.password.encode("utf-8")
    ):
        logger.info(f"Failed login for user={request.username!r}")
        flash_message(session, "No user and password found", ERROR_COLOR)
        return _redirect_home()

    _, user_level = account
    session.regenerate_id(delete_old=True)
    session["logged_in"] = True
    session["username"] = request.username
    session["user_level"] = user_level
    session.csrf.regenerate_token()

    role = "an administrator" if user_level == 2 else "a normal user"
    flash_message(session, f"You have logged in as {role}", SUCCESS_COLOR)
    logger.info(f"User {request.username!r} logged in (level {user_level})")
    return _redirect_home()


@router.get("/logout", summary="Log out")
async def logout(session: LazySession = Depends(get_session)) -> RedirectResponse:
    session.clear()
    flash_message(session, "You have logged out", INFO_COLOR)
    return _redirect_home()
