"""Shared FastAPI dependencies and session cookie helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, Response, UploadFile

from makeup_studio.domain.auth import AdminIdentity
from makeup_studio.domain.forms import UploadedFile
from makeup_studio.services.auth import CALLBACK_PATH

if TYPE_CHECKING:
    from makeup_studio.config import Settings
    from makeup_studio.containers import AppContainer

OAUTH_VERIFIER_MAX_AGE = 600


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def session_token(request: Request) -> str | None:
    """Return the access token stored in the session cookie."""
    container = get_container(request)
    return request.cookies.get(container.settings.session_cookie_name) or None


async def require_admin(request: Request) -> AdminIdentity:
    """Resolve the session cookie to an admin or raise ``AdminRedirect``."""
    container = get_container(request)
    return container.auth_gate.require_admin(session_token(request))


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")


def set_oauth_verifier_cookie(
    response: Response, settings: Settings, verifier: str
) -> None:
    """Keep the PKCE verifier with the browser until the OAuth callback."""
    response.set_cookie(
        settings.oauth_verifier_cookie_name,
        verifier,
        max_age=OAUTH_VERIFIER_MAX_AGE,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path=CALLBACK_PATH,
    )


def oauth_verifier(request: Request) -> str | None:
    container = get_container(request)
    return request.cookies.get(container.settings.oauth_verifier_cookie_name) or None


def clear_oauth_verifier_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.oauth_verifier_cookie_name, path=CALLBACK_PATH)


def read_upload(
    request: Request, file: UploadFile | None
) -> UploadedFile | None:
    """Read a multipart upload; empty inputs count as no file.

    At most one byte past the upload limit is read, so an oversized file is
    rejected without being held in memory.
    """
    if file is None or not file.filename:
        return None
    assets = get_container(request).assets
    if file.size is not None:
        assets.check_size(file.size)
    content = file.file.read(assets.max_upload_bytes + 1)
    assets.check_size(len(content))
    if not content:
        return None
    return UploadedFile(
        filename=file.filename,
        content_type=file.content_type or "",
        content=content,
    )
