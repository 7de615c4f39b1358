"""Supabase Auth adapter."""

import logging
from dataclasses import dataclass

from supabase import Client

from makeup_studio.domain.auth import AuthIdentity, AuthSession, OAuthStart
from makeup_studio.errors import AuthError, AuthFailure
from makeup_studio.services.auth import AuthProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Supabase Auth implementation of the auth provider.

    Uses its own client so sign-ins never replace the service-role session
    used by the repositories.
    """

    client: Client

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            logger.warning("Password sign-in rejected", exc_info=True)
            raise AuthError(AuthFailure.INVALID_CREDENTIALS) from exc
        return _session_from(response)

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Create an account with email and password."""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            logger.warning("Sign-up rejected", exc_info=True)
            raise AuthError(
                AuthFailure.PROVIDER_FAILURE, f"Registration failed: {exc}"
            ) from exc
        if response.user is None:
            raise AuthError(AuthFailure.PROVIDER_FAILURE)
        return _identity_from(response.user)

    def oauth_url(
        self, provider: str, redirect_to: str, query_params: dict[str, str]
    ) -> OAuthStart:
        """Return the provider authorization URL and its PKCE code verifier.

        The auth client keeps the verifier in its own storage, which every
        visitor shares; it is taken out here and handed back to the caller.
        """
        try:
            response = self.client.auth.sign_in_with_oauth(
                {
                    "provider": provider,
                    "options": {
                        "redirect_to": redirect_to,
                        "query_params": query_params,
                    },
                }
            )
        except Exception as exc:
            logger.exception("OAuth start failed", extra={"provider": provider})
            raise AuthError(AuthFailure.PROVIDER_FAILURE) from exc
        return OAuthStart(url=response.url, code_verifier=self._take_code_verifier())

    def exchange_code(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange an OAuth callback code for a session."""
        params = {"auth_code": code}
        if code_verifier:
            params["code_verifier"] = code_verifier
        try:
            response = self.client.auth.exchange_code_for_session(params)
        except Exception as exc:
            raise AuthError(AuthFailure.PROVIDER_FAILURE) from exc
        return _session_from(response)

    def get_identity(self, access_token: str) -> AuthIdentity | None:
        """Return the user behind an access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            logger.info("Access token rejected", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return _identity_from(response.user)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        self.client.auth.admin.sign_out(access_token)

    def _take_code_verifier(self) -> str | None:
        auth = self.client.auth
        key = f"{auth._storage_key}-code-verifier"  # noqa: SLF001
        verifier = auth._storage.get_item(key)  # noqa: SLF001
        if verifier:
            auth._storage.remove_item(key)  # noqa: SLF001
        return verifier or None


def _identity_from(user) -> AuthIdentity:  # type: ignore[no-untyped-def]
    return AuthIdentity(user_id=str(user.id), email=user.email)


def _session_from(response) -> AuthSession:  # type: ignore[no-untyped-def]
    if response.session is None or response.user is None:
        raise AuthError(AuthFailure.PROVIDER_FAILURE)
    return AuthSession(
        access_token=response.session.access_token,
        identity=_identity_from(response.user),
    )
