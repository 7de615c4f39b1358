"""Admin authoring workflows for gallery images, services, FAQs and the profile."""

import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Protocol, TypeVar

from makeup_studio.domain.auth import AdminIdentity
from makeup_studio.domain.content import (
    FAQ,
    PROFILE_IMAGE_SLOTS,
    PROFILE_TEXT_FIELDS,
    AdminProfile,
    GalleryImage,
    Service,
    profile_path_field,
)
from makeup_studio.domain.forms import (
    FileInput,
    ImageInput,
    NoImage,
    ProfileDraft,
    RequestState,
    RequestStatus,
    UrlInput,
)
from makeup_studio.errors import (
    OperationInProgress,
    RepositoryError,
    ValidationError,
)
from makeup_studio.services.assets import ABOUT_FOLDER, GALLERY_FOLDER, AssetService
from makeup_studio.services.content import (
    FAQRepository,
    GalleryRepository,
    ProfileRepository,
    ServiceRepository,
)
from makeup_studio.services.images import resolve_display_url, strip_wrapping_quotes

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


class _Categorized(Protocol):
    category: str


_RecordT = TypeVar("_RecordT", bound=_Categorized)


def filter_by_category(records: Sequence[_RecordT], category: str) -> list[_RecordT]:
    """Return records in a category, or all records for ``"all"``."""
    if not category or category == ALL_CATEGORIES:
        return list(records)
    return [record for record in records if record.category == category]


def categories(records: Sequence[_Categorized]) -> list[str]:
    """Return distinct non-empty categories in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        if record.category:
            seen.setdefault(record.category, None)
    return list(seen)


class OperationTracker:
    """Per-operation request state for one authoring service.

    A key that is still pending rejects a second submission.
    """

    def __init__(self) -> None:
        self._states: dict[str, RequestState] = {}
        self._lock = threading.Lock()

    def state(self, key: str) -> RequestState:
        with self._lock:
            return self._states.get(key, RequestState())

    @contextmanager
    def track(self, key: str) -> Iterator[None]:
        """Mark ``key`` pending for the duration of the block."""
        with self._lock:
            current = self._states.get(key, RequestState())
            if current.status is RequestStatus.PENDING:
                raise OperationInProgress(
                    "This action is already in progress. Please wait."
                )
            self._states[key] = RequestState(status=RequestStatus.PENDING)
        try:
            yield
        except Exception as exc:
            reason = getattr(exc, "message", None) or str(exc) or "Unknown error"
            with self._lock:
                self._states[key] = RequestState.failed(reason)
            raise
        with self._lock:
            self._states[key] = RequestState(status=RequestStatus.SUCCEEDED)


def _require(value: str | None, field_name: str, message: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(field_name, message)
    return cleaned


def _require_image(image: ImageInput) -> None:
    if isinstance(image, NoImage):
        raise ValidationError("image", "Please enter an image URL or choose a file")
    if isinstance(image, UrlInput) and not strip_wrapping_quotes(image.url):
        raise ValidationError("image", "Please enter an image URL")


@dataclass(frozen=True)
class GalleryDraft:
    """Text fields of the gallery form."""

    title: str
    category: str
    alt_text: str


@dataclass(frozen=True)
class ServiceDraft:
    """Raw values of the service form."""

    title: str
    description: str
    price: str
    duration: str
    category: str
    image_url: str = ""
    featured: bool = False


@dataclass(frozen=True)
class FAQDraft:
    """Raw values of the FAQ form."""

    question: str
    answer: str
    category: str
    display_order: str = ""


def _gallery_fields(draft: GalleryDraft) -> dict[str, object]:
    return {
        "title": _require(draft.title, "title", "Please enter a title"),
        "category": _require(draft.category, "category", "Please enter a category"),
        "alt_text": _require(
            draft.alt_text, "alt_text", "Please enter alt text for accessibility"
        ),
    }


def _service_fields(draft: ServiceDraft) -> dict[str, object]:
    title = _require(draft.title, "title", "Please enter a title")
    description = _require(
        draft.description, "description", "Please enter a description"
    )
    raw_price = _require(draft.price, "price", "Please enter a price")
    raw_duration = _require(
        draft.duration, "duration", "Please enter duration in minutes"
    )
    category = _require(draft.category, "category", "Please enter a category")
    try:
        price = Decimal(raw_price)
    except InvalidOperation as exc:
        raise ValidationError("price", "Please enter a valid price") from exc
    if not price.is_finite() or price < 0:
        raise ValidationError("price", "Price cannot be negative")
    try:
        duration = int(raw_duration)
    except ValueError as exc:
        raise ValidationError(
            "duration", "Please enter duration in whole minutes"
        ) from exc
    if duration <= 0:
        raise ValidationError("duration", "Duration must be a positive number of minutes")
    image_url = strip_wrapping_quotes(draft.image_url or "")
    return {
        "title": title,
        "description": description,
        "price": str(price),
        "duration": duration,
        "category": category,
        "image_url": image_url or None,
        "featured": draft.featured,
    }


def _faq_fields(draft: FAQDraft) -> dict[str, object]:
    fields: dict[str, object] = {
        "question": _require(draft.question, "question", "Please enter a question"),
        "answer": _require(draft.answer, "answer", "Please enter an answer"),
        "category": _require(draft.category, "category", "Please enter a category"),
    }
    raw_order = (draft.display_order or "").strip()
    try:
        fields["display_order"] = int(raw_order) if raw_order else 0
    except ValueError as exc:
        raise ValidationError(
            "display_order", "Display order must be a whole number"
        ) from exc
    return fields


@dataclass
class GalleryAuthoringService:
    """Create, update and delete gallery images and their stored objects."""

    repository: GalleryRepository
    assets: AssetService
    tracker: OperationTracker = field(default_factory=OperationTracker)

    def list_images(
        self, category: str = ALL_CATEGORIES
    ) -> tuple[list[GalleryImage], list[str]]:
        """Return images in a category plus every category in use."""
        images = self.repository.list_images()
        return filter_by_category(images, category), categories(images)

    def display_url(self, image: GalleryImage) -> str | None:
        return resolve_display_url(image.image_url, image.image_path, self.assets)

    def create(self, draft: GalleryDraft, image: ImageInput) -> GalleryImage:
        """Create a gallery image from a URL or an uploaded file.

        When the insert fails after an upload, the upload is removed.
        """
        with self.tracker.track("create"):
            fields = _gallery_fields(draft)
            _require_image(image)
            if isinstance(image, FileInput):
                stored_path = self.assets.upload_to_folder(image.file, GALLERY_FOLDER)
                payload = {
                    **fields,
                    "image_url": self.assets.get_public_url(stored_path),
                    "image_path": stored_path,
                }
                try:
                    created = self.repository.create_image(payload)
                except RepositoryError:
                    logger.warning(
                        "Gallery insert failed, removing upload %s", stored_path
                    )
                    self.assets.remove([stored_path])
                    raise
            else:
                payload = {
                    **fields,
                    "image_url": strip_wrapping_quotes(image.url),
                    "image_path": None,
                }
                created = self.repository.create_image(payload)
        logger.info("Gallery image %s created", created.id)
        return created

    def update(
        self, image_id: str, draft: GalleryDraft, image: ImageInput
    ) -> GalleryImage:
        """Update a gallery image, replacing its stored object when given a file."""
        with self.tracker.track(f"update:{image_id}"):
            fields = _gallery_fields(draft)
            if not isinstance(image, NoImage):
                _require_image(image)
            current = self.repository.get_image(image_id)
            if current is None:
                raise RepositoryError("Gallery image not found", not_found=True)
            payload = dict(fields)
            replaced_path: str | None = None
            if isinstance(image, FileInput):
                stored_path = self.assets.upload_to_folder(image.file, GALLERY_FOLDER)
                self.assets.remove([current.image_path])
                payload["image_url"] = self.assets.get_public_url(stored_path)
                payload["image_path"] = stored_path
            elif isinstance(image, UrlInput):
                payload["image_url"] = strip_wrapping_quotes(image.url)
                payload["image_path"] = None
                replaced_path = current.image_path
            updated = self.repository.update_image(image_id, payload)
            self.assets.remove([replaced_path])
        logger.info("Gallery image %s updated", image_id)
        return updated

    def delete(self, image_id: str) -> None:
        """Delete a gallery image, then its stored object."""
        with self.tracker.track(f"delete:{image_id}"):
            current = self.repository.get_image(image_id)
            self.repository.delete_image(image_id)
            if current is not None:
                self.assets.remove([current.image_path])
        logger.info("Gallery image %s deleted", image_id)


@dataclass
class ServiceAuthoringService:
    """Create, update and delete services."""

    repository: ServiceRepository
    tracker: OperationTracker = field(default_factory=OperationTracker)

    def list_services(
        self, category: str = ALL_CATEGORIES
    ) -> tuple[list[Service], list[str]]:
        services = self.repository.list_services()
        return filter_by_category(services, category), categories(services)

    def create(self, draft: ServiceDraft) -> Service:
        with self.tracker.track("create"):
            created = self.repository.create_service(_service_fields(draft))
        logger.info("Service %s created", created.id)
        return created

    def update(self, service_id: str, draft: ServiceDraft) -> Service:
        with self.tracker.track(f"update:{service_id}"):
            updated = self.repository.update_service(
                service_id, _service_fields(draft)
            )
        logger.info("Service %s updated", service_id)
        return updated

    def delete(self, service_id: str) -> None:
        with self.tracker.track(f"delete:{service_id}"):
            self.repository.delete_service(service_id)
        logger.info("Service %s deleted", service_id)


@dataclass
class FAQAuthoringService:
    """Create, update and delete FAQs."""

    repository: FAQRepository
    tracker: OperationTracker = field(default_factory=OperationTracker)

    def list_faqs(self, category: str = ALL_CATEGORIES) -> tuple[list[FAQ], list[str]]:
        faqs = self.repository.list_faqs()
        return filter_by_category(faqs, category), categories(faqs)

    def create(self, draft: FAQDraft) -> FAQ:
        with self.tracker.track("create"):
            created = self.repository.create_faq(_faq_fields(draft))
        logger.info("FAQ %s created", created.id)
        return created

    def update(self, faq_id: str, draft: FAQDraft) -> FAQ:
        with self.tracker.track(f"update:{faq_id}"):
            updated = self.repository.update_faq(faq_id, _faq_fields(draft))
        logger.info("FAQ %s updated", faq_id)
        return updated

    def delete(self, faq_id: str) -> None:
        with self.tracker.track(f"delete:{faq_id}"):
            self.repository.delete_faq(faq_id)
        logger.info("FAQ %s deleted", faq_id)


@dataclass
class ProfileAuthoringService:
    """Edit the signed-in admin's bios and about images."""

    profiles: ProfileRepository
    assets: AssetService
    tracker: OperationTracker = field(default_factory=OperationTracker)

    def get_profile(self, admin: AdminIdentity) -> AdminProfile:
        profile = self.profiles.get_by_user_id(admin.user_id)
        if profile is None:
            raise RepositoryError("Admin profile not found", not_found=True)
        return profile

    def display_urls(self, profile: AdminProfile) -> dict[str, str | None]:
        """Return the resolved URL of each about image slot."""
        return {
            "about_image_1": resolve_display_url(
                profile.about_image_1, profile.about_image_1_path, self.assets
            ),
            "about_image_2": resolve_display_url(
                profile.about_image_2, profile.about_image_2_path, self.assets
            ),
        }

    def draft_of(self, profile: AdminProfile) -> ProfileDraft:
        """Return the dashboard snapshot for a loaded profile."""
        return ProfileDraft(
            bio=profile.bio or "",
            bio_2=profile.bio_2 or "",
            about_image_1=profile.about_image_1 or "",
            about_image_2=profile.about_image_2 or "",
        )

    def has_unsaved_changes(self, admin: AdminIdentity, draft: ProfileDraft) -> bool:
        """Compare a dashboard draft with the stored profile."""
        return draft.differs_from(self.draft_of(self.get_profile(admin)))

    def update_text(self, admin: AdminIdentity, field_name: str, value: str) -> AdminProfile:
        """Update ``bio`` or ``bio_2``."""
        if field_name not in PROFILE_TEXT_FIELDS:
            raise ValidationError(field_name, f"Unknown profile field {field_name}")
        with self.tracker.track(field_name):
            profile = self.get_profile(admin)
            updated = self.profiles.update_profile(
                profile.id, {field_name: value.strip()}
            )
        logger.info("Profile %s updated", field_name)
        return updated

    def update_image(
        self, admin: AdminIdentity, slot: str, image: ImageInput
    ) -> AdminProfile:
        """Set an about image from a URL or an uploaded file.

        A new file is uploaded before the previous object is removed; removal
        failures never block the profile write.
        """
        if slot not in PROFILE_IMAGE_SLOTS:
            raise ValidationError(slot, f"Unknown image slot {slot}")
        path_field = profile_path_field(slot)
        with self.tracker.track(slot):
            _require_image(image)
            profile = self.get_profile(admin)
            previous_path: str | None = getattr(profile, path_field)
            if isinstance(image, FileInput):
                stored_path = self.assets.upload_to_folder(image.file, ABOUT_FOLDER)
                self.assets.remove([previous_path])
                payload: dict[str, object] = {
                    slot: self.assets.get_public_url(stored_path),
                    path_field: stored_path,
                }
                updated = self.profiles.update_profile(profile.id, payload)
            else:
                updated = self.profiles.update_profile(
                    profile.id,
                    {slot: strip_wrapping_quotes(image.url), path_field: None},
                )
                self.assets.remove([previous_path])
        logger.info("Profile %s updated", slot)
        return updated
