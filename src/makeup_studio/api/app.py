"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from makeup_studio.api.admin import router as admin_router
from makeup_studio.api.auth import router as auth_router
from makeup_studio.api.deps import clear_session_cookie
from makeup_studio.api.public import router as public_router
from makeup_studio.app_logging import configure_logging
from makeup_studio.containers import AppContainer
from makeup_studio.domain.forms import Banner
from makeup_studio.errors import (
    AdminRedirect,
    AuthError,
    AuthFailure,
    ContactRelayError,
    OperationInProgress,
    RepositoryError,
    UploadError,
    ValidationError,
)

_AUTH_STATUS = {
    AuthFailure.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.NO_SESSION: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    AuthFailure.INVALID_SECRET: status.HTTP_403_FORBIDDEN,
    AuthFailure.DUPLICATE_REGISTRATION: status.HTTP_409_CONFLICT,
    AuthFailure.PROVIDER_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(AdminRedirect)
    async def admin_redirect(request: Request, exc: AdminRedirect) -> RedirectResponse:
        response = RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)
        clear_session_cookie(response, request.app.state.container.settings)
        return response

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(422, exc.message, field=exc.field)

    @app.exception_handler(RepositoryError)
    async def repository_error(request: Request, exc: RepositoryError) -> JSONResponse:
        if exc.not_found:
            return _error_response(status.HTTP_404_NOT_FOUND, exc.message)
        if exc.unique_violation:
            return _error_response(status.HTTP_409_CONFLICT, exc.message)
        logger.error(
            "Content store request failed",
            exc_info=exc.cause or exc,
            extra={"path": request.url.path},
        )
        return _error_response(status.HTTP_502_BAD_GATEWAY, exc.message)

    @app.exception_handler(UploadError)
    async def upload_error(request: Request, exc: UploadError) -> JSONResponse:
        status_code = 413 if exc.too_large else status.HTTP_400_BAD_REQUEST
        return _error_response(status_code, exc.message)

    @app.exception_handler(AuthError)
    async def auth_error(request: Request, exc: AuthError) -> JSONResponse:
        return _error_response(
            _AUTH_STATUS[exc.reason], exc.message, reason=exc.reason.value
        )

    @app.exception_handler(OperationInProgress)
    async def operation_in_progress(
        request: Request, exc: OperationInProgress
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, exc.message)

    @app.exception_handler(ContactRelayError)
    async def contact_relay_error(
        request: Request, exc: ContactRelayError
    ) -> JSONResponse:
        return _error_response(status.HTTP_502_BAD_GATEWAY, exc.message)

    return app


def _error_response(status_code: int, message: str, **extra: str) -> JSONResponse:
    """Return an error body carrying an auto-dismissing banner."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "banner": Banner.error(message).as_dict(), **extra},
    )
