"""Admin authentication gate."""

import hmac
import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode

from makeup_studio.domain.auth import (
    AdminIdentity,
    AuthIdentity,
    AuthSession,
    AuthState,
    GateResult,
    OAuthStart,
)
from makeup_studio.errors import (
    AdminRedirect,
    AuthError,
    AuthFailure,
    RepositoryError,
    ValidationError,
)
from makeup_studio.services.content import ProfileRepository

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
ADMIN_PATH = "/admin"
CALLBACK_PATH = "/auth/callback"
OAUTH_PROVIDERS = frozenset({"google"})
_OAUTH_QUERY_PARAMS = {"access_type": "offline", "prompt": "consent"}


class AuthProvider(Protocol):
    """Interface for the managed auth provider."""

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with credentials; raise AuthError(INVALID_CREDENTIALS)."""

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Create a provider account and return its identity."""

    def oauth_url(
        self, provider: str, redirect_to: str, query_params: dict[str, str]
    ) -> OAuthStart:
        """Return the provider URL that starts an OAuth sign-in."""

    def exchange_code(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange an OAuth callback code for a session."""

    def get_identity(self, access_token: str) -> AuthIdentity | None:
        """Return the identity behind an access token, if it is valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke a session."""


@dataclass(frozen=True)
class OAuthOutcome:
    """Where to send the browser after an OAuth callback."""

    location: str
    session: AuthSession | None = None


def login_path(**params: str) -> str:
    """Return the login path with optional query parameters."""
    if not params:
        return LOGIN_PATH
    return f"{LOGIN_PATH}?{urlencode(params)}"


def _safe_next(next_path: str | None) -> str:
    if next_path and next_path.startswith("/") and not next_path.startswith("//"):
        return next_path
    return ADMIN_PATH


@dataclass
class AuthGate:
    """Resolve sessions against the admin allow-list and profile records.

    An identity is an admin only when its email is allow-listed and a profile
    row exists for its user id. Anything that cannot be confirmed is treated
    as not-admin.
    """

    provider: AuthProvider
    profiles: ProfileRepository
    admin_emails: frozenset[str]
    registration_secret: str
    site_url: str

    def resolve(self, access_token: str | None) -> GateResult:
        """Classify an access token into one of the gate states."""
        if not access_token:
            return GateResult(state=AuthState.UNAUTHENTICATED)
        try:
            identity = self.provider.get_identity(access_token)
        except Exception:
            logger.warning("Failed to resolve session", exc_info=True)
            return GateResult(state=AuthState.UNAUTHENTICATED)
        if identity is None:
            return GateResult(state=AuthState.UNAUTHENTICATED)
        admin = self._admin_for(identity)
        if admin is None:
            return GateResult(
                state=AuthState.AUTHENTICATED_NON_ADMIN, identity=identity
            )
        return GateResult(
            state=AuthState.AUTHENTICATED_ADMIN, identity=identity, admin=admin
        )

    def require_admin(self, access_token: str | None) -> AdminIdentity:
        """Return the admin identity or raise ``AdminRedirect``.

        Non-admin sessions are signed out before redirecting.
        """
        result = self.resolve(access_token)
        if result.admin is not None:
            return result.admin
        if result.state is AuthState.AUTHENTICATED_NON_ADMIN and access_token:
            logger.warning(
                "Non-admin session reached admin area",
                extra={"user_id": result.identity.user_id if result.identity else None},
            )
            self.sign_out(access_token)
            raise AdminRedirect(login_path(error="unauthorized"))
        raise AdminRedirect(LOGIN_PATH)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with credentials and keep the session only for admins."""
        if not email.strip() or not password:
            raise ValidationError("email", "Please enter your email and password")
        session = self.provider.sign_in_with_password(email.strip(), password)
        if self._admin_for(session.identity) is None:
            self.sign_out(session.access_token)
            raise AuthError(AuthFailure.UNAUTHORIZED)
        logger.info("Admin signed in", extra={"user_id": session.identity.user_id})
        return session

    def register(self, email: str, password: str, secret: str) -> AdminIdentity:
        """Create a provider account and its admin profile."""
        self._check_secret(secret)
        cleaned_email = email.strip()
        if not cleaned_email or not password:
            raise ValidationError("email", "Please enter your email and password")
        self._check_allowed(cleaned_email)
        identity = self.provider.sign_up(cleaned_email, password)
        return self._create_profile(identity)

    def register_current_identity(
        self, access_token: str | None, secret: str
    ) -> AdminIdentity:
        """Create the admin profile for an already signed-in identity."""
        self._check_secret(secret)
        identity = (
            self.provider.get_identity(access_token) if access_token else None
        )
        if identity is None:
            raise AuthError(AuthFailure.NO_SESSION)
        self._check_allowed(identity.email)
        return self._create_profile(identity)

    def oauth_start(self, provider: str, registration: bool = False) -> OAuthStart:
        """Return the provider URL for an OAuth sign-in or registration."""
        if provider not in OAUTH_PROVIDERS:
            raise ValidationError("provider", f"Unsupported sign-in provider {provider}")
        if registration:
            query = urlencode({"google_registration": "true"})
        else:
            query = urlencode({"next": ADMIN_PATH})
        redirect_to = f"{self.site_url.rstrip('/')}{CALLBACK_PATH}?{query}"
        return self.provider.oauth_url(provider, redirect_to, dict(_OAUTH_QUERY_PARAMS))

    def complete_oauth(
        self,
        code: str | None,
        registration: bool = False,
        next_path: str | None = None,
        code_verifier: str | None = None,
    ) -> OAuthOutcome:
        """Exchange an OAuth code and decide where the browser goes next."""
        if not code:
            return OAuthOutcome(location=login_path(error="auth_failed"))
        try:
            session = self.provider.exchange_code(code, code_verifier)
        except AuthError:
            logger.warning("OAuth code exchange failed", exc_info=True)
            return OAuthOutcome(location=login_path(error="auth_failed"))
        if self._admin_for(session.identity) is not None:
            return OAuthOutcome(location=_safe_next(next_path), session=session)
        if registration:
            return OAuthOutcome(
                location=login_path(google_registration="true"), session=session
            )
        self.sign_out(session.access_token)
        return OAuthOutcome(location=login_path(error="unauthorized"))

    def sign_out(self, access_token: str | None) -> None:
        """Revoke a session; failures are logged since the cookie is dropped anyway."""
        if not access_token:
            return
        try:
            self.provider.sign_out(access_token)
        except Exception:
            logger.warning("Provider sign-out failed", exc_info=True)

    def _admin_for(self, identity: AuthIdentity) -> AdminIdentity | None:
        email = (identity.email or "").strip().lower()
        if email not in self.admin_emails:
            return None
        try:
            profile = self.profiles.get_by_user_id(identity.user_id)
        except RepositoryError:
            logger.warning("Admin profile lookup failed", exc_info=True)
            return None
        if profile is None:
            return None
        return AdminIdentity(user_id=identity.user_id, email=email, profile_id=profile.id)

    def _check_secret(self, secret: str) -> None:
        if not hmac.compare_digest(
            secret.encode("utf-8"), self.registration_secret.encode("utf-8")
        ):
            raise AuthError(AuthFailure.INVALID_SECRET)

    def _check_allowed(self, email: str | None) -> None:
        if (email or "").strip().lower() not in self.admin_emails:
            raise AuthError(AuthFailure.UNAUTHORIZED)

    def _create_profile(self, identity: AuthIdentity) -> AdminIdentity:
        if self.profiles.get_by_user_id(identity.user_id) is not None:
            raise AuthError(AuthFailure.DUPLICATE_REGISTRATION)
        email = (identity.email or "").strip().lower()
        try:
            profile = self.profiles.create_profile(identity.user_id, email)
        except RepositoryError as exc:
            if exc.unique_violation:
                raise AuthError(AuthFailure.DUPLICATE_REGISTRATION) from exc
            raise
        logger.info("Registered admin profile", extra={"user_id": identity.user_id})
        return AdminIdentity(user_id=identity.user_id, email=email, profile_id=profile.id)
