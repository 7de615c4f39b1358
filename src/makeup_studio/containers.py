"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from makeup_studio.adapters.contact_relay_client import HttpxContactRelayClient
from makeup_studio.adapters.supabase_asset_store import SupabaseAssetStore
from makeup_studio.adapters.supabase_auth_provider import SupabaseAuthProvider
from makeup_studio.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
    SupabaseContactRepository,
)
from makeup_studio.adapters.supabase_content_repository import (
    SupabaseFAQRepository,
    SupabaseGalleryRepository,
    SupabaseServiceRepository,
)
from makeup_studio.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from makeup_studio.config import Settings, parse_admin_emails
from makeup_studio.services.assets import AssetService
from makeup_studio.services.auth import AuthGate
from makeup_studio.services.authoring import (
    FAQAuthoringService,
    GalleryAuthoringService,
    ProfileAuthoringService,
    ServiceAuthoringService,
)
from makeup_studio.services.bookings import BookingService, ContactService
from makeup_studio.services.public import PublicContentService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_gate: AuthGate
    assets: AssetService
    public_content: PublicContentService
    gallery_authoring: GalleryAuthoringService
    service_authoring: ServiceAuthoringService
    faq_authoring: FAQAuthoringService
    profile_authoring: ProfileAuthoringService
    booking_service: BookingService
    contact_service: ContactService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_repository = SupabaseGalleryRepository(supabase_client)
    service_repository = SupabaseServiceRepository(supabase_client)
    faq_repository = SupabaseFAQRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    contact_repository = SupabaseContactRepository(supabase_client)
    assets = AssetService(
        store=SupabaseAssetStore(supabase_client, resolved_settings.storage_bucket),
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )
    auth_gate = AuthGate(
        provider=SupabaseAuthProvider(auth_client),
        profiles=profile_repository,
        admin_emails=parse_admin_emails(resolved_settings.admin_emails),
        registration_secret=resolved_settings.admin_registration_secret,
        site_url=resolved_settings.site_url,
    )
    relay_client = (
        HttpxContactRelayClient.create(resolved_settings.contact_relay_url)
        if resolved_settings.contact_relay_url
        else None
    )

    async def close_resources() -> None:
        if relay_client is not None:
            await relay_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_gate=auth_gate,
        assets=assets,
        public_content=PublicContentService(
            gallery=gallery_repository,
            services=service_repository,
            faqs=faq_repository,
            profiles=profile_repository,
            assets=assets,
            primary_admin_email=resolved_settings.primary_admin_email,
        ),
        gallery_authoring=GalleryAuthoringService(gallery_repository, assets),
        service_authoring=ServiceAuthoringService(service_repository),
        faq_authoring=FAQAuthoringService(faq_repository),
        profile_authoring=ProfileAuthoringService(profile_repository, assets),
        booking_service=BookingService(booking_repository, service_repository),
        contact_service=ContactService(contact_repository, relay_client),
        close_resources=close_resources,
    )
