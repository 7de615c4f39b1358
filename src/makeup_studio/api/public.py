"""Public page data, booking and contact endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.encoders import jsonable_encoder

from makeup_studio.api.deps import get_container, session_token
from makeup_studio.api.request_models import BookingPayload, ContactPayload
from makeup_studio.domain.bookings import BookingRequest, ContactSubmission
from makeup_studio.domain.forms import Banner

if TYPE_CHECKING:
    from makeup_studio.services.images import ImageSlot

router = APIRouter(tags=["public"])


def _slot(slot: ImageSlot) -> dict[str, object]:
    return {**slot.as_dict(), "onerror": slot.onerror_attribute()}


@router.get("/pages/home")
async def home_page(request: Request) -> dict[str, object]:
    """Carousel, gallery preview and about teaser."""
    page = get_container(request).public_content.home()
    return {
        "carousel": jsonable_encoder(page.carousel),
        "preview": jsonable_encoder(page.preview),
        "bio": page.bio,
        "profile_image": _slot(page.profile_image),
        "source": page.source.value,
    }


@router.get("/pages/about")
async def about_page(request: Request) -> dict[str, object]:
    """Both bios and about images."""
    page = get_container(request).public_content.about()
    return {
        "bio": page.bio,
        "bio_2": page.bio_2,
        "primary_image": _slot(page.primary_image),
        "secondary_image": _slot(page.secondary_image),
        "source": page.source.value,
    }


@router.get("/pages/services")
async def services_page(request: Request, category: str = "all") -> dict[str, object]:
    """Service list with category filter."""
    page = get_container(request).public_content.services_page(category)
    return jsonable_encoder(page)


@router.get("/pages/gallery")
async def gallery_page(request: Request, category: str = "all") -> dict[str, object]:
    """Gallery cards with category filter."""
    page = get_container(request).public_content.gallery_page(category)
    return jsonable_encoder(page)


@router.get("/pages/faq")
async def faq_page(
    request: Request, category: str = "all", q: str = ""
) -> dict[str, object]:
    """FAQs with category and text search filters."""
    page = get_container(request).public_content.faq_page(category, q)
    return jsonable_encoder(page)


@router.get("/pages/contact")
async def contact_page(request: Request) -> dict[str, object]:
    """Contact details and the leading FAQs."""
    return jsonable_encoder(get_container(request).public_content.contact_page())


@router.get("/pages/scheduling")
async def scheduling_page(request: Request) -> dict[str, object]:
    """Bookable services and start times."""
    return jsonable_encoder(get_container(request).public_content.scheduling_page())


@router.post("/bookings", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingPayload, request: Request
) -> dict[str, object]:
    """Submit a booking request; signed-in visitors are linked to it."""
    container = get_container(request)
    result = container.auth_gate.resolve(session_token(request))
    client_id = result.identity.user_id if result.identity else None
    booking = container.booking_service.create_booking(
        BookingRequest(**payload.model_dump()), client_id=client_id
    )
    return {
        "booking": jsonable_encoder(booking),
        "banner": Banner.success(
            "Your booking request has been sent! We'll confirm your appointment soon."
        ).as_dict(),
    }


@router.post("/contact", status_code=status.HTTP_202_ACCEPTED)
async def submit_contact(payload: ContactPayload, request: Request) -> dict[str, object]:
    """Send a contact form message."""
    container = get_container(request)
    await container.contact_service.submit(ContactSubmission(**payload.model_dump()))
    return {
        "status": "ok",
        "banner": Banner.success(
            "Thank you for your message! We'll get back to you soon."
        ).as_dict(),
    }
