"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from itertools import count
from urllib.parse import quote
from uuid import uuid4

import pytest

from makeup_studio.config import Settings, parse_admin_emails
from makeup_studio.containers import AppContainer
from makeup_studio.domain.auth import AuthIdentity, AuthSession, OAuthStart
from makeup_studio.domain.bookings import Booking, BookingStatus
from makeup_studio.domain.content import FAQ, AdminProfile, GalleryImage, Service
from makeup_studio.errors import AuthError, AuthFailure, ContactRelayError, RepositoryError
from makeup_studio.services.assets import AssetService, AssetStore
from makeup_studio.services.auth import AuthGate, AuthProvider
from makeup_studio.services.authoring import (
    FAQAuthoringService,
    GalleryAuthoringService,
    ProfileAuthoringService,
    ServiceAuthoringService,
)
from makeup_studio.services.bookings import (
    BookingRepository,
    BookingService,
    ContactRelay,
    ContactRepository,
    ContactService,
)
from makeup_studio.services.content import (
    FAQRepository,
    GalleryRepository,
    ProfileRepository,
    ServiceRepository,
)
from makeup_studio.services.public import PublicContentService

ADMIN_EMAIL = "admin@example.com"
REGISTRATION_SECRET = "let-me-in"
PUBLIC_URL_BASE = "https://cdn.example.test/portfolio-images/"

_BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
_ticks = count(1)


def next_timestamp() -> datetime:
    """Return strictly increasing creation times."""
    return _BASE_TIME + timedelta(seconds=next(_ticks))


def _new_id() -> str:
    return str(uuid4())


def _unavailable(description: str) -> RepositoryError:
    return RepositoryError(f"{description}: backend unavailable", TimeoutError())


@dataclass
class InMemoryGalleryRepository(GalleryRepository):
    """In-memory gallery repository for tests."""

    images: dict[str, GalleryImage] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False

    def list_images(
        self, category: str | None = None, limit: int | None = None
    ) -> list[GalleryImage]:
        if self.fail_reads:
            raise _unavailable("List gallery images")
        rows = sorted(
            self.images.values(), key=lambda image: image.created_at, reverse=True
        )
        if category:
            rows = [row for row in rows if row.category == category]
        return rows[:limit] if limit is not None else rows

    def get_image(self, image_id: str) -> GalleryImage | None:
        return self.images.get(image_id)

    def create_image(self, payload: dict[str, object]) -> GalleryImage:
        if self.fail_writes:
            raise _unavailable("Create gallery image")
        image = GalleryImage(
            id=_new_id(),
            title=str(payload["title"]),
            category=str(payload["category"]),
            alt_text=str(payload["alt_text"]),
            image_url=payload.get("image_url"),  # type: ignore[arg-type]
            image_path=payload.get("image_path"),  # type: ignore[arg-type]
            created_at=next_timestamp(),
        )
        self.images[image.id] = image
        return image

    def update_image(self, image_id: str, payload: dict[str, object]) -> GalleryImage:
        if self.fail_writes:
            raise _unavailable("Update gallery image")
        current = self.images.get(image_id)
        if current is None:
            raise RepositoryError("Update gallery image: no matching row", not_found=True)
        updated = replace(current, **payload)
        self.images[image_id] = updated
        return updated

    def delete_image(self, image_id: str) -> None:
        self.images.pop(image_id, None)


@dataclass
class InMemoryServiceRepository(ServiceRepository):
    """In-memory service repository for tests."""

    services: dict[str, Service] = field(default_factory=dict)
    fail_reads: bool = False

    def list_services(
        self, category: str | None = None, limit: int | None = None
    ) -> list[Service]:
        if self.fail_reads:
            raise _unavailable("List services")
        rows = sorted(
            self.services.values(), key=lambda service: service.created_at, reverse=True
        )
        if category:
            rows = [row for row in rows if row.category == category]
        return rows[:limit] if limit is not None else rows

    def get_service(self, service_id: str) -> Service | None:
        return self.services.get(service_id)

    def create_service(self, payload: dict[str, object]) -> Service:
        service = Service(
            id=_new_id(),
            created_at=next_timestamp(),
            **_service_columns(payload),
        )
        self.services[service.id] = service
        return service

    def update_service(self, service_id: str, payload: dict[str, object]) -> Service:
        current = self.services.get(service_id)
        if current is None:
            raise RepositoryError("Update service: no matching row", not_found=True)
        updated = replace(current, **_service_columns(payload))
        self.services[service_id] = updated
        return updated

    def delete_service(self, service_id: str) -> None:
        self.services.pop(service_id, None)


def _service_columns(payload: dict[str, object]) -> dict[str, object]:
    columns = dict(payload)
    columns["price"] = Decimal(str(payload["price"]))
    return columns


@dataclass
class InMemoryFAQRepository(FAQRepository):
    """In-memory FAQ repository for tests."""

    faqs: dict[str, FAQ] = field(default_factory=dict)
    fail_reads: bool = False

    def list_faqs(
        self, category: str | None = None, limit: int | None = None
    ) -> list[FAQ]:
        if self.fail_reads:
            raise _unavailable("List FAQs")
        newest_first = sorted(
            self.faqs.values(), key=lambda faq: faq.created_at, reverse=True
        )
        rows = sorted(newest_first, key=lambda faq: faq.display_order)
        if category:
            rows = [row for row in rows if row.category == category]
        return rows[:limit] if limit is not None else rows

    def get_faq(self, faq_id: str) -> FAQ | None:
        return self.faqs.get(faq_id)

    def create_faq(self, payload: dict[str, object]) -> FAQ:
        faq = FAQ(id=_new_id(), created_at=next_timestamp(), **payload)  # type: ignore[arg-type]
        self.faqs[faq.id] = faq
        return faq

    def update_faq(self, faq_id: str, payload: dict[str, object]) -> FAQ:
        current = self.faqs.get(faq_id)
        if current is None:
            raise RepositoryError("Update FAQ: no matching row", not_found=True)
        updated = replace(current, **payload)
        self.faqs[faq_id] = updated
        return updated

    def delete_faq(self, faq_id: str) -> None:
        self.faqs.pop(faq_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory admin profile repository for tests."""

    profiles: dict[str, AdminProfile] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False

    def get_by_user_id(self, user_id: str) -> AdminProfile | None:
        if self.fail_reads:
            raise _unavailable("Fetch admin profile")
        for profile in self.profiles.values():
            if profile.user_id == user_id:
                return profile
        return None

    def list_by_email(self, email: str) -> list[AdminProfile]:
        if self.fail_reads:
            raise _unavailable("List admin profiles by email")
        return [
            profile for profile in self._oldest_first() if profile.email == email
        ]

    def list_profiles(self, limit: int) -> list[AdminProfile]:
        if self.fail_reads:
            raise _unavailable("List admin profiles")
        return self._oldest_first()[:limit]

    def create_profile(self, user_id: str, email: str) -> AdminProfile:
        if self.fail_writes:
            raise _unavailable("Create admin profile")
        if any(profile.user_id == user_id for profile in self.profiles.values()):
            raise RepositoryError(
                "Create admin profile: duplicate key value", unique_violation=True
            )
        profile = AdminProfile(
            id=_new_id(),
            user_id=user_id,
            email=email,
            bio=None,
            bio_2=None,
            about_image_1=None,
            about_image_1_path=None,
            about_image_2=None,
            about_image_2_path=None,
            created_at=next_timestamp(),
        )
        self.profiles[profile.id] = profile
        return profile

    def update_profile(
        self, profile_id: str, payload: dict[str, object]
    ) -> AdminProfile:
        if self.fail_writes:
            raise _unavailable("Update admin profile")
        current = self.profiles.get(profile_id)
        if current is None:
            raise RepositoryError("Update admin profile: no matching row", not_found=True)
        updated = replace(current, **payload)
        self.profiles[profile_id] = updated
        return updated

    def _oldest_first(self) -> list[AdminProfile]:
        return sorted(self.profiles.values(), key=lambda profile: profile.created_at)


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory booking repository for tests."""

    bookings: dict[str, Booking] = field(default_factory=dict)
    payloads: list[dict[str, object]] = field(default_factory=list)

    def create_booking(self, payload: dict[str, object]) -> Booking:
        self.payloads.append(dict(payload))
        booking = Booking(
            id=_new_id(),
            client_name=str(payload["client_name"]),
            client_email=str(payload["client_email"]),
            client_phone=str(payload["client_phone"]),
            service_id=str(payload["service_id"]),
            service_name=str(payload["service_name"]),
            booking_date=str(payload["booking_date"]),
            start_time=str(payload["start_time"]),
            end_time=str(payload["end_time"]),
            notes=str(payload.get("notes") or ""),
            client_id=payload.get("client_id"),  # type: ignore[arg-type]
            status=BookingStatus(payload["status"]),
            created_at=next_timestamp(),
        )
        self.bookings[booking.id] = booking
        return booking

    def list_bookings(self, limit: int) -> list[Booking]:
        rows = sorted(
            self.bookings.values(), key=lambda booking: booking.created_at, reverse=True
        )
        return rows[:limit]

    def update_booking(self, booking_id: str, payload: dict[str, object]) -> Booking:
        current = self.bookings.get(booking_id)
        if current is None:
            raise RepositoryError("Update booking: no matching row", not_found=True)
        self.payloads.append(dict(payload))
        updated = replace(current, status=BookingStatus(payload["status"]))
        self.bookings[booking_id] = updated
        return updated


@dataclass
class InMemoryContactRepository(ContactRepository):
    """In-memory contact submission repository for tests."""

    submissions: list[dict[str, object]] = field(default_factory=list)

    def create_submission(self, payload: dict[str, object]) -> None:
        self.submissions.append(payload)


@dataclass
class FakeContactRelay(ContactRelay):
    """Fake contact relay that records submissions."""

    submissions: list[dict[str, str]] = field(default_factory=list)
    fail: bool = False

    async def submit(self, fields: dict[str, str]) -> None:
        if self.fail:
            raise ContactRelayError("Your message could not be sent. Please try again.")
        self.submissions.append(fields)


@dataclass
class FakeAssetStore(AssetStore):
    """In-memory bucket that records uploads and removals."""

    objects: dict[str, bytes] = field(default_factory=dict)
    uploads: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    fail_upload: bool = False
    fail_remove: bool = False

    def upload(self, content: bytes, path: str, content_type: str) -> str:
        if self.fail_upload:
            raise RuntimeError("storage unavailable")
        if path in self.objects:
            raise RuntimeError("The resource already exists")
        self.objects[path] = content
        self.uploads.append(path)
        return path

    def get_public_url(self, path: str) -> str:
        return f"{PUBLIC_URL_BASE}{path}"

    def remove(self, paths: list[str]) -> None:
        if self.fail_remove:
            raise RuntimeError("storage unavailable")
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)


@dataclass
class FakeAuthProvider(AuthProvider):
    """In-memory auth provider with password accounts and OAuth codes."""

    accounts: dict[str, tuple[str, str]] = field(default_factory=dict)
    sessions: dict[str, AuthIdentity] = field(default_factory=dict)
    oauth_codes: dict[str, AuthIdentity] = field(default_factory=dict)
    oauth_requests: list[tuple[str, str, dict[str, str]]] = field(default_factory=list)
    code_verifiers: dict[str, str] = field(default_factory=dict)
    signed_out: list[str] = field(default_factory=list)
    sign_ups: list[str] = field(default_factory=list)

    def add_account(self, email: str, password: str = "correct-horse") -> AuthIdentity:
        user_id = _new_id()
        self.accounts[email] = (password, user_id)
        return AuthIdentity(user_id=user_id, email=email)

    def issue_token(self, identity: AuthIdentity) -> str:
        token = f"token-{uuid4().hex}"
        self.sessions[token] = identity
        return token

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError(AuthFailure.INVALID_CREDENTIALS)
        identity = AuthIdentity(user_id=account[1], email=email)
        return AuthSession(access_token=self.issue_token(identity), identity=identity)

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        if email in self.accounts:
            raise AuthError(
                AuthFailure.PROVIDER_FAILURE, "Registration failed: User already registered"
            )
        self.sign_ups.append(email)
        return self.add_account(email, password)

    def oauth_url(
        self, provider: str, redirect_to: str, query_params: dict[str, str]
    ) -> OAuthStart:
        self.oauth_requests.append((provider, redirect_to, query_params))
        url = (
            f"https://auth.example.test/authorize?provider={provider}"
            f"&redirect_to={quote(redirect_to, safe='')}"
        )
        return OAuthStart(url=url, code_verifier=f"verifier-{len(self.oauth_requests)}")

    def exchange_code(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        identity = self.oauth_codes.get(code)
        expected = self.code_verifiers.get(code)
        if identity is None or (expected is not None and expected != code_verifier):
            raise AuthError(AuthFailure.PROVIDER_FAILURE)
        return AuthSession(access_token=self.issue_token(identity), identity=identity)

    def get_identity(self, access_token: str) -> AuthIdentity | None:
        return self.sessions.get(access_token)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.sessions.pop(access_token, None)


def seed_admin(
    provider: FakeAuthProvider,
    profiles: InMemoryProfileRepository,
    email: str = ADMIN_EMAIL,
) -> str:
    """Create an admin account with a profile and return a session token."""
    identity = provider.add_account(email)
    profiles.create_profile(identity.user_id, email)
    return provider.issue_token(identity)


def make_image(**overrides: object) -> GalleryImage:
    values: dict[str, object] = {
        "id": _new_id(),
        "title": "Soft glam",
        "category": "bridal",
        "alt_text": "Bride with soft glam makeup",
        "image_url": "https://images.example.test/soft-glam.jpg",
        "image_path": None,
        "created_at": next_timestamp(),
    }
    values.update(overrides)
    return GalleryImage(**values)  # type: ignore[arg-type]


def make_service(**overrides: object) -> Service:
    values: dict[str, object] = {
        "id": _new_id(),
        "title": "Bridal Makeup",
        "description": "Full bridal look",
        "price": Decimal("250"),
        "duration": 60,
        "category": "bridal",
        "image_url": None,
        "featured": True,
        "created_at": next_timestamp(),
    }
    values.update(overrides)
    return Service(**values)  # type: ignore[arg-type]


def make_faq(**overrides: object) -> FAQ:
    values: dict[str, object] = {
        "id": _new_id(),
        "question": "Do you travel?",
        "answer": "Yes, travel fees may apply.",
        "category": "Services",
        "display_order": 0,
        "created_at": next_timestamp(),
    }
    values.update(overrides)
    return FAQ(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_emails=f"{ADMIN_EMAIL}, Owner@Example.com",
        primary_admin_email=ADMIN_EMAIL,
        admin_registration_secret=REGISTRATION_SECRET,
        site_url="https://studio.example.test",
    )


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def assets(asset_store: FakeAssetStore) -> AssetService:
    return AssetService(store=asset_store)


@pytest.fixture
def gallery_repository() -> InMemoryGalleryRepository:
    return InMemoryGalleryRepository()


@pytest.fixture
def service_repository() -> InMemoryServiceRepository:
    return InMemoryServiceRepository()


@pytest.fixture
def faq_repository() -> InMemoryFAQRepository:
    return InMemoryFAQRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def auth_gate(
    settings: Settings,
    auth_provider: FakeAuthProvider,
    profile_repository: InMemoryProfileRepository,
) -> AuthGate:
    return AuthGate(
        provider=auth_provider,
        profiles=profile_repository,
        admin_emails=parse_admin_emails(settings.admin_emails),
        registration_secret=settings.admin_registration_secret,
        site_url=settings.site_url,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    assets: AssetService,
    auth_gate: AuthGate,
    gallery_repository: InMemoryGalleryRepository,
    service_repository: InMemoryServiceRepository,
    faq_repository: InMemoryFAQRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_gate=auth_gate,
        assets=assets,
        public_content=PublicContentService(
            gallery=gallery_repository,
            services=service_repository,
            faqs=faq_repository,
            profiles=profile_repository,
            assets=assets,
            primary_admin_email=settings.primary_admin_email,
        ),
        gallery_authoring=GalleryAuthoringService(gallery_repository, assets),
        service_authoring=ServiceAuthoringService(service_repository),
        faq_authoring=FAQAuthoringService(faq_repository),
        profile_authoring=ProfileAuthoringService(profile_repository, assets),
        booking_service=BookingService(
            InMemoryBookingRepository(), service_repository
        ),
        contact_service=ContactService(InMemoryContactRepository()),
        close_resources=close_resources,
    )
