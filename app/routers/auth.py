import logging

from fastapi import APIRouter, Response

from app.config import get_settings
from app.core.exceptions import UnauthorizedException
from app.core.security import verify_password, create_admin_token
from app.dependencies import IsAdmin
from app.schemas.auth import AdminLoginRequest, AdminStatusResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=MessageResponse,
    summary="Log in to the admin area",
)
async def login(request: AdminLoginRequest, response: Response):
    """
    Exchange the shared admin password for a session cookie.

    The cookie holds a signed token; it is HttpOnly and expires after
    `ADMIN_SESSION_EXPIRE_HOURS`.
    """
    settings = get_settings()

    if not verify_password(request.password, settings.admin_password_hash):
        logger.warning("Rejected admin login attempt")
        raise UnauthorizedException("Invalid password")

    response.set_cookie(
        key=settings.admin_cookie_name,
        value=create_admin_token(),
        max_age=settings.admin_session_expire_hours * 3600,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
    )
    logger.info("Admin logged in")
    return MessageResponse(message="Logged in")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out of the admin area",
)
async def logout(response: Response):
    """Clear the admin session cookie."""
    settings = get_settings()
    response.delete_cookie(key=settings.admin_cookie_name)
    return MessageResponse(message="Logged out")


@router.get(
    "/check",
    response_model=AdminStatusResponse,
    summary="Check admin session",
)
async def check(is_admin: IsAdmin):
    """Report whether the caller holds a valid admin session."""
    return AdminStatusResponse(authenticated=is_admin)
