"""Domain models for authentication."""

from dataclasses import dataclass
from enum import Enum


class AuthState(Enum):
    """Where a visitor stands with respect to the admin area."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NON_ADMIN = "authenticated_non_admin"
    AUTHENTICATED_ADMIN = "authenticated_admin"


@dataclass(frozen=True)
class AuthIdentity:
    """User identity as reported by the auth provider."""

    user_id: str
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """A provider session issued after sign-in or an OAuth exchange."""

    access_token: str
    identity: AuthIdentity


@dataclass(frozen=True)
class AdminIdentity:
    """An identity that passed the admin gate."""

    user_id: str
    email: str
    profile_id: str


@dataclass(frozen=True)
class GateResult:
    """Outcome of resolving a session against the admin gate."""

    state: AuthState
    identity: AuthIdentity | None = None
    admin: AdminIdentity | None = None


@dataclass(frozen=True)
class OAuthStart:
    """Provider URL for an OAuth sign-in plus the PKCE verifier it was issued with.

    The verifier travels with the browser so the callback can be completed by
    any process.
    """

    url: str
    code_verifier: str | None = None
