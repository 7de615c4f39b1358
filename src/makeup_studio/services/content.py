"""Persistence interfaces for site content."""

from typing import Protocol

from makeup_studio.domain.content import FAQ, AdminProfile, GalleryImage, Service


class GalleryRepository(Protocol):
    """Persistence interface for gallery images (newest first)."""

    def list_images(
        self, category: str | None = None, limit: int | None = None
    ) -> list[GalleryImage]:
        """Return gallery images ordered by creation time, newest first."""

    def get_image(self, image_id: str) -> GalleryImage | None:
        """Return a gallery image by id, if present."""

    def create_image(self, payload: dict[str, object]) -> GalleryImage:
        """Create a gallery image and return it."""

    def update_image(self, image_id: str, payload: dict[str, object]) -> GalleryImage:
        """Update a gallery image and return it."""

    def delete_image(self, image_id: str) -> None:
        """Delete a gallery image."""


class ServiceRepository(Protocol):
    """Persistence interface for services (newest first)."""

    def list_services(
        self, category: str | None = None, limit: int | None = None
    ) -> list[Service]:
        """Return services ordered by creation time, newest first."""

    def get_service(self, service_id: str) -> Service | None:
        """Return a service by id, if present."""

    def create_service(self, payload: dict[str, object]) -> Service:
        """Create a service and return it."""

    def update_service(self, service_id: str, payload: dict[str, object]) -> Service:
        """Update a service and return it."""

    def delete_service(self, service_id: str) -> None:
        """Delete a service."""


class FAQRepository(Protocol):
    """Persistence interface for FAQs (display order, then newest first)."""

    def list_faqs(
        self, category: str | None = None, limit: int | None = None
    ) -> list[FAQ]:
        """Return FAQs by display order ascending, then creation time descending."""

    def get_faq(self, faq_id: str) -> FAQ | None:
        """Return an FAQ by id, if present."""

    def create_faq(self, payload: dict[str, object]) -> FAQ:
        """Create an FAQ and return it."""

    def update_faq(self, faq_id: str, payload: dict[str, object]) -> FAQ:
        """Update an FAQ and return it."""

    def delete_faq(self, faq_id: str) -> None:
        """Delete an FAQ."""


class ProfileRepository(Protocol):
    """Persistence interface for admin profiles."""

    def get_by_user_id(self, user_id: str) -> AdminProfile | None:
        """Return the profile bound to an auth identity, if present."""

    def list_by_email(self, email: str) -> list[AdminProfile]:
        """Return profiles registered with an email."""

    def list_profiles(self, limit: int) -> list[AdminProfile]:
        """Return profiles, oldest first."""

    def create_profile(self, user_id: str, email: str) -> AdminProfile:
        """Create a profile for an identity and return it."""

    def update_profile(
        self, profile_id: str, payload: dict[str, object]
    ) -> AdminProfile:
        """Update profile columns and return the profile."""
