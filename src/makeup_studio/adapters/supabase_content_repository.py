"""Supabase repositories for gallery images, services and FAQs."""

from dataclasses import dataclass
from decimal import Decimal

from supabase import Client

from makeup_studio.adapters.supabase_query import (
    fetch_optional,
    first_row,
    optional_text,
    parse_timestamp,
    run_query,
)
from makeup_studio.domain.content import FAQ, GalleryImage, Service
from makeup_studio.services.content import (
    FAQRepository,
    GalleryRepository,
    ServiceRepository,
)


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for the ``images`` table."""

    client: Client

    def list_images(
        self, category: str | None = None, limit: int | None = None
    ) -> list[GalleryImage]:
        """Return gallery images, newest first."""
        query = self.client.table("images").select("*")
        if category:
            query = query.eq("category", category)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        return [_parse_image(row) for row in run_query(query, "List gallery images")]

    def get_image(self, image_id: str) -> GalleryImage | None:
        """Return a gallery image by id, if present."""
        row = fetch_optional(
            self.client.table("images").select("*").eq("id", image_id).limit(1),
            "Fetch gallery image",
        )
        return _parse_image(row) if row is not None else None

    def create_image(self, payload: dict[str, object]) -> GalleryImage:
        """Insert a gallery image and return it."""
        rows = run_query(
            self.client.table("images").insert(payload), "Create gallery image"
        )
        return _parse_image(first_row(rows, "Create gallery image"))

    def update_image(self, image_id: str, payload: dict[str, object]) -> GalleryImage:
        """Update a gallery image and return it."""
        rows = run_query(
            self.client.table("images").update(payload).eq("id", image_id),
            "Update gallery image",
        )
        return _parse_image(first_row(rows, "Update gallery image"))

    def delete_image(self, image_id: str) -> None:
        """Delete a gallery image."""
        run_query(
            self.client.table("images").delete().eq("id", image_id),
            "Delete gallery image",
        )


@dataclass
class SupabaseServiceRepository(ServiceRepository):
    """Supabase implementation for the ``services`` table."""

    client: Client

    def list_services(
        self, category: str | None = None, limit: int | None = None
    ) -> list[Service]:
        """Return services, newest first."""
        query = self.client.table("services").select("*")
        if category:
            query = query.eq("category", category)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        return [_parse_service(row) for row in run_query(query, "List services")]

    def get_service(self, service_id: str) -> Service | None:
        """Return a service by id, if present."""
        row = fetch_optional(
            self.client.table("services").select("*").eq("id", service_id).limit(1),
            "Fetch service",
        )
        return _parse_service(row) if row is not None else None

    def create_service(self, payload: dict[str, object]) -> Service:
        """Insert a service and return it."""
        rows = run_query(self.client.table("services").insert(payload), "Create service")
        return _parse_service(first_row(rows, "Create service"))

    def update_service(self, service_id: str, payload: dict[str, object]) -> Service:
        """Update a service and return it."""
        rows = run_query(
            self.client.table("services").update(payload).eq("id", service_id),
            "Update service",
        )
        return _parse_service(first_row(rows, "Update service"))

    def delete_service(self, service_id: str) -> None:
        """Delete a service."""
        run_query(
            self.client.table("services").delete().eq("id", service_id),
            "Delete service",
        )


@dataclass
class SupabaseFAQRepository(FAQRepository):
    """Supabase implementation for the ``faqs`` table."""

    client: Client

    def list_faqs(
        self, category: str | None = None, limit: int | None = None
    ) -> list[FAQ]:
        """Return FAQs by display order, newest first within an order."""
        query = self.client.table("faqs").select("*")
        if category:
            query = query.eq("category", category)
        query = query.order("display_order", desc=False).order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        return [_parse_faq(row) for row in run_query(query, "List FAQs")]

    def get_faq(self, faq_id: str) -> FAQ | None:
        """Return an FAQ by id, if present."""
        row = fetch_optional(
            self.client.table("faqs").select("*").eq("id", faq_id).limit(1),
            "Fetch FAQ",
        )
        return _parse_faq(row) if row is not None else None

    def create_faq(self, payload: dict[str, object]) -> FAQ:
        """Insert an FAQ and return it."""
        rows = run_query(self.client.table("faqs").insert(payload), "Create FAQ")
        return _parse_faq(first_row(rows, "Create FAQ"))

    def update_faq(self, faq_id: str, payload: dict[str, object]) -> FAQ:
        """Update an FAQ and return it."""
        rows = run_query(
            self.client.table("faqs").update(payload).eq("id", faq_id), "Update FAQ"
        )
        return _parse_faq(first_row(rows, "Update FAQ"))

    def delete_faq(self, faq_id: str) -> None:
        """Delete an FAQ."""
        run_query(self.client.table("faqs").delete().eq("id", faq_id), "Delete FAQ")


def _parse_image(row: dict[str, object]) -> GalleryImage:
    return GalleryImage(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        category=str(row.get("category") or ""),
        alt_text=str(row.get("alt_text") or ""),
        image_url=optional_text(row.get("image_url")),
        image_path=optional_text(row.get("image_path")),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _parse_service(row: dict[str, object]) -> Service:
    return Service(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        price=Decimal(str(row.get("price") or 0)),
        duration=int(row.get("duration") or 0),
        category=str(row.get("category") or ""),
        image_url=optional_text(row.get("image_url")),
        featured=bool(row.get("featured", False)),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _parse_faq(row: dict[str, object]) -> FAQ:
    return FAQ(
        id=str(row["id"]),
        question=str(row.get("question") or ""),
        answer=str(row.get("answer") or ""),
        category=str(row.get("category") or ""),
        display_order=int(row.get("display_order") or 0),
        created_at=parse_timestamp(row.get("created_at")),
    )
