"""Domain models for site content."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ContentSource(Enum):
    """Where the data on a public page came from."""

    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class GalleryImage:
    """A portfolio image shown in the gallery and carousel."""

    id: str
    title: str
    category: str
    alt_text: str
    image_url: str | None
    image_path: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class Service:
    """A bookable makeup service."""

    id: str
    title: str
    description: str
    price: Decimal
    duration: int
    category: str
    image_url: str | None
    featured: bool
    created_at: datetime | None


@dataclass(frozen=True)
class FAQ:
    """A frequently asked question."""

    id: str
    question: str
    answer: str
    category: str
    display_order: int
    created_at: datetime | None


@dataclass(frozen=True)
class AdminProfile:
    """Profile content owned by an admin identity."""

    id: str
    user_id: str | None
    email: str
    bio: str | None
    bio_2: str | None
    about_image_1: str | None
    about_image_1_path: str | None
    about_image_2: str | None
    about_image_2_path: str | None
    created_at: datetime | None = None


PROFILE_TEXT_FIELDS = ("bio", "bio_2")
PROFILE_IMAGE_SLOTS = ("about_image_1", "about_image_2")


def profile_path_field(slot: str) -> str:
    """Return the stored-path column paired with a profile image column."""
    return f"{slot}_path"


def order_faqs(faqs: list[FAQ]) -> list[FAQ]:
    """Sort FAQs by display order, newest first within the same order."""
    newest_first = sorted(
        faqs,
        key=lambda faq: faq.created_at.timestamp() if faq.created_at else 0.0,
        reverse=True,
    )
    return sorted(newest_first, key=lambda faq: faq.display_order)
