"""Form and request state for the admin authoring views."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class UploadedFile:
    """An image file received from an admin form."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        """Return the file size in bytes."""
        return len(self.content)


@dataclass(frozen=True)
class UrlInput:
    """Image given as a direct URL."""

    url: str


@dataclass(frozen=True)
class FileInput:
    """Image given as a file to upload."""

    file: UploadedFile


@dataclass(frozen=True)
class NoImage:
    """No pending image change."""


ImageInput = UrlInput | FileInput | NoImage


class PendingImage:
    """Holds the single pending image value of a form.

    Entering a URL discards a selected file and selecting a file discards
    an entered URL.
    """

    def __init__(self) -> None:
        self._value: ImageInput = NoImage()

    @property
    def value(self) -> ImageInput:
        return self._value

    @property
    def url(self) -> str | None:
        return self._value.url if isinstance(self._value, UrlInput) else None

    @property
    def file(self) -> UploadedFile | None:
        return self._value.file if isinstance(self._value, FileInput) else None

    def enter_url(self, url: str) -> None:
        self._value = UrlInput(url) if url.strip() else NoImage()

    def select_file(self, file: UploadedFile) -> None:
        self._value = FileInput(file)

    def clear(self) -> None:
        self._value = NoImage()


def image_input_from_form(
    url: str | None, file: UploadedFile | None
) -> ImageInput:
    """Build the pending image from raw form values; a file wins over a URL."""
    pending = PendingImage()
    if url:
        pending.enter_url(url)
    if file is not None and file.content:
        pending.select_file(file)
    return pending.value


@dataclass
class EditForm:
    """Create/edit state of a content form."""

    blank: dict[str, str]
    fields: dict[str, str] = field(default_factory=dict)
    editing_id: str | None = None
    anchor: str = "edit-form"
    image: PendingImage = field(default_factory=PendingImage)
    _snapshot: dict[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not self.fields:
            self.fields = dict(self.blank)
        self._snapshot = dict(self.fields)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submit_action(self) -> str:
        return "update" if self.is_editing else "create"

    @property
    def has_unsaved_changes(self) -> bool:
        return self.fields != self._snapshot or not isinstance(
            self.image.value, NoImage
        )

    def begin_edit(self, record_id: str, values: dict[str, str]) -> None:
        """Load a record into the form and switch the submit action to update."""
        self.editing_id = record_id
        self.fields = {
            key: values.get(key, default) for key, default in self.blank.items()
        }
        self._snapshot = dict(self.fields)
        self.image.clear()

    def set(self, name: str, value: str) -> None:
        if name not in self.blank:
            raise KeyError(name)
        self.fields[name] = value

    def cancel(self) -> None:
        """Drop the edit and return to an empty create form."""
        self.editing_id = None
        self.fields = dict(self.blank)
        self._snapshot = dict(self.fields)
        self.image.clear()

    def as_dict(self) -> dict[str, object]:
        return {
            "action": self.submit_action,
            "editing_id": self.editing_id,
            "anchor": self.anchor,
            "fields": dict(self.fields),
        }


@dataclass(frozen=True)
class ProfileDraft:
    """Editable profile values as currently shown in the dashboard."""

    bio: str = ""
    bio_2: str = ""
    about_image_1: str = ""
    about_image_2: str = ""
    pending_file_1: bool = False
    pending_file_2: bool = False

    def differs_from(self, initial: "ProfileDraft") -> bool:
        """Return True when the draft diverges from the loaded snapshot."""
        return (
            self.bio != initial.bio
            or self.bio_2 != initial.bio_2
            or self.about_image_1 != initial.about_image_1
            or self.about_image_2 != initial.about_image_2
            or self.pending_file_1
            or self.pending_file_2
        )


class RequestStatus(Enum):
    """Progress of a single admin operation."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    """Status of an operation plus the failure reason when it failed."""

    status: RequestStatus = RequestStatus.IDLE
    reason: str | None = None

    @classmethod
    def failed(cls, reason: str) -> "RequestState":
        return cls(status=RequestStatus.FAILED, reason=reason)


BANNER_DISMISS_MS = 3000


@dataclass(frozen=True)
class Banner:
    """Inline, auto-dismissing admin message."""

    kind: str
    text: str
    dismiss_after_ms: int = BANNER_DISMISS_MS

    @classmethod
    def success(cls, text: str) -> "Banner":
        return cls(kind="success", text=text)

    @classmethod
    def error(cls, text: str) -> "Banner":
        return cls(kind="error", text=f"Error: {text}")

    def as_dict(self) -> dict[str, object]:
        return {
            "type": self.kind,
            "text": self.text,
            "dismiss_after_ms": self.dismiss_after_ms,
        }
