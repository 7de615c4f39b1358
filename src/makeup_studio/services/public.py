"""Read models for the public pages.

Every page does a single best-effort read per data set. Failures and empty
results are logged and replaced by hardcoded content so a visitor never sees
a broken page.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TypeVar

from makeup_studio.domain.content import (
    FAQ,
    AdminProfile,
    ContentSource,
    GalleryImage,
    Service,
    order_faqs,
)
from makeup_studio.domain.fallbacks import (
    AVAILABLE_TIMES,
    CONTACT_DETAILS,
    DEFAULT_PROFILE,
    FALLBACK_CAROUSEL,
    FALLBACK_FAQS,
    FALLBACK_SERVICES,
    PLACEHOLDER_IMAGE,
)
from makeup_studio.services.assets import AssetService
from makeup_studio.services.authoring import categories, filter_by_category
from makeup_studio.services.bookings import bookable_dates
from makeup_studio.services.content import (
    FAQRepository,
    GalleryRepository,
    ProfileRepository,
    ServiceRepository,
)
from makeup_studio.services.images import (
    ImageSlot,
    profile_image_slot,
    resolve_display_url,
    secondary_image_slot,
)

logger = logging.getLogger(__name__)

CAROUSEL_SIZE = 6
PREVIEW_WINDOW = 10
PREVIEW_SIZE = 4
CONTACT_FAQ_COUNT = 4

_T = TypeVar("_T")


def select_preview(recent: Sequence[_T]) -> list[_T]:
    """Pick the home page preview from the most recent images.

    Images after the carousel are preferred; short lists are topped up from
    the start.
    """
    if len(recent) >= PREVIEW_WINDOW:
        return list(recent[CAROUSEL_SIZE:PREVIEW_WINDOW])
    if len(recent) >= CAROUSEL_SIZE:
        picks = list(recent[CAROUSEL_SIZE:])
        needed = PREVIEW_SIZE - len(picks)
        return picks + list(recent[:needed]) if needed > 0 else picks
    return list(recent[:PREVIEW_SIZE])


def search_faqs(faqs: Sequence[FAQ], query: str) -> list[FAQ]:
    """Return FAQs whose question or answer contains the query."""
    needle = query.strip().lower()
    if not needle:
        return list(faqs)
    return [
        faq
        for faq in faqs
        if needle in faq.question.lower() or needle in faq.answer.lower()
    ]


@dataclass(frozen=True)
class GalleryCard:
    """A gallery image with its display URL resolved."""

    id: str
    title: str
    category: str
    alt_text: str
    src: str


@dataclass(frozen=True)
class HomePage:
    carousel: list[GalleryCard]
    preview: list[GalleryCard]
    bio: str
    profile_image: ImageSlot
    source: ContentSource


@dataclass(frozen=True)
class AboutPage:
    bio: str
    bio_2: str
    primary_image: ImageSlot
    secondary_image: ImageSlot
    source: ContentSource


@dataclass(frozen=True)
class ServicesPage:
    services: list[Service]
    categories: list[str]
    source: ContentSource


@dataclass(frozen=True)
class GalleryPage:
    images: list[GalleryCard]
    categories: list[str]
    source: ContentSource


@dataclass(frozen=True)
class FAQPage:
    faqs: list[FAQ]
    categories: list[str]
    source: ContentSource


@dataclass(frozen=True)
class ContactPage:
    faqs: list[FAQ]
    contact: dict[str, str]
    source: ContentSource


@dataclass(frozen=True)
class SchedulingPage:
    services: list[Service]
    available_times: list[str]
    available_dates: list[date]
    source: ContentSource


def _combined(*sources: ContentSource) -> ContentSource:
    if ContentSource.FALLBACK in sources:
        return ContentSource.FALLBACK
    return ContentSource.LIVE


@dataclass
class PublicContentService:
    """Build the data shown on each public page."""

    gallery: GalleryRepository
    services: ServiceRepository
    faqs: FAQRepository
    profiles: ProfileRepository
    assets: AssetService
    primary_admin_email: str | None = None

    def home(self) -> HomePage:
        carousel, carousel_source = self._read(
            "carousel images",
            lambda: self.gallery.list_images(limit=CAROUSEL_SIZE),
            FALLBACK_CAROUSEL,
        )
        recent, recent_source = self._read(
            "preview images",
            lambda: self.gallery.list_images(limit=PREVIEW_WINDOW),
            FALLBACK_CAROUSEL,
        )
        profile, profile_source = self._select_profile()
        primary, _ = self._profile_images(profile)
        return HomePage(
            carousel=[self._card(image) for image in carousel],
            preview=[self._card(image) for image in select_preview(recent)],
            bio=profile.bio or DEFAULT_PROFILE.bio or "",
            profile_image=profile_image_slot(primary),
            source=_combined(carousel_source, recent_source, profile_source),
        )

    def about(self) -> AboutPage:
        profile, source = self._select_profile()
        primary, secondary = self._profile_images(profile)
        return AboutPage(
            bio=profile.bio or DEFAULT_PROFILE.bio or "",
            bio_2=profile.bio_2 or DEFAULT_PROFILE.bio_2 or "",
            primary_image=profile_image_slot(primary),
            secondary_image=secondary_image_slot(secondary),
            source=source,
        )

    def services_page(self, category: str = "all") -> ServicesPage:
        services, source = self._read(
            "services", self.services.list_services, FALLBACK_SERVICES
        )
        return ServicesPage(
            services=filter_by_category(services, category),
            categories=categories(services),
            source=source,
        )

    def gallery_page(self, category: str = "all") -> GalleryPage:
        images, source = self._read(
            "gallery images", self.gallery.list_images, FALLBACK_CAROUSEL
        )
        return GalleryPage(
            images=[self._card(image) for image in filter_by_category(images, category)],
            categories=categories(images),
            source=source,
        )

    def faq_page(self, category: str = "all", query: str = "") -> FAQPage:
        faqs, source = self._read("FAQs", self.faqs.list_faqs, FALLBACK_FAQS)
        ordered = order_faqs(faqs)
        return FAQPage(
            faqs=search_faqs(filter_by_category(ordered, category), query),
            categories=categories(ordered),
            source=source,
        )

    def contact_page(self) -> ContactPage:
        faqs, source = self._read(
            "contact FAQs",
            lambda: self.faqs.list_faqs(limit=CONTACT_FAQ_COUNT),
            FALLBACK_FAQS[:CONTACT_FAQ_COUNT],
        )
        return ContactPage(
            faqs=list(faqs[:CONTACT_FAQ_COUNT]),
            contact=dict(CONTACT_DETAILS),
            source=source,
        )

    def scheduling_page(self, today: date | None = None) -> SchedulingPage:
        services, source = self._read(
            "bookable services", self.services.list_services, FALLBACK_SERVICES
        )
        return SchedulingPage(
            services=services,
            available_times=list(AVAILABLE_TIMES),
            available_dates=bookable_dates(today or datetime.now(tz=UTC).date()),
            source=source,
        )

    def _read(
        self,
        description: str,
        fetch: Callable[[], list[_T]],
        fallback: list[_T],
    ) -> tuple[list[_T], ContentSource]:
        try:
            rows = fetch()
        except Exception:
            logger.warning("Failed to load %s; using fallback", description, exc_info=True)
            return list(fallback), ContentSource.FALLBACK
        if not rows:
            logger.info("No %s stored; using fallback", description)
            return list(fallback), ContentSource.FALLBACK
        return rows, ContentSource.LIVE

    def _select_profile(self) -> tuple[AdminProfile, ContentSource]:
        try:
            if self.primary_admin_email:
                matches = self.profiles.list_by_email(self.primary_admin_email.lower())
                if matches:
                    return matches[0], ContentSource.LIVE
            first = self.profiles.list_profiles(limit=1)
        except Exception:
            logger.warning("Failed to load admin profile; using default", exc_info=True)
            return DEFAULT_PROFILE, ContentSource.FALLBACK
        if first:
            return first[0], ContentSource.LIVE
        return DEFAULT_PROFILE, ContentSource.FALLBACK

    def _profile_images(self, profile: AdminProfile) -> tuple[str | None, str | None]:
        primary = resolve_display_url(
            profile.about_image_1, profile.about_image_1_path, self.assets
        )
        secondary = resolve_display_url(
            profile.about_image_2, profile.about_image_2_path, self.assets
        )
        if profile is not DEFAULT_PROFILE and secondary is None:
            secondary = DEFAULT_PROFILE.about_image_2
        return primary, secondary

    def _card(self, image: GalleryImage) -> GalleryCard:
        return GalleryCard(
            id=image.id,
            title=image.title,
            category=image.category,
            alt_text=image.alt_text,
            src=resolve_display_url(image.image_url, image.image_path, self.assets)
            or PLACEHOLDER_IMAGE,
        )
