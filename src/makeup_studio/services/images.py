"""Display URL resolution for stored and linked images."""

import html
from dataclasses import dataclass

from makeup_studio.domain.fallbacks import DEFAULT_PROFILE_IMAGE
from makeup_studio.services.assets import AssetService

_WRAPPING_QUOTES = "'\""


def strip_wrapping_quotes(value: str) -> str:
    """Remove stray quote characters wrapped around a stored URL."""
    return value.strip().strip(_WRAPPING_QUOTES).strip()


def resolve_display_url(
    image_url: str | None, image_path: str | None, assets: AssetService
) -> str | None:
    """Return the URL to display for an image.

    A stored path always wins over a direct URL. Returns None when the record
    has neither, so callers can substitute a placeholder.
    """
    if image_path and image_path.strip():
        return assets.get_public_url(image_path.strip())
    if image_url:
        cleaned = strip_wrapping_quotes(image_url)
        return cleaned or None
    return None


def _js_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


@dataclass(frozen=True)
class ImageSlot:
    """An image plus what to do if it fails to load in the browser."""

    src: str | None
    fallback_src: str | None = None
    hide_on_error: bool = False

    def onerror_attribute(self) -> str:
        """Return an escaped ``onerror`` handler that runs at most once."""
        if self.fallback_src:
            script = f"this.onerror=null;this.src={_js_string(self.fallback_src)};"
        elif self.hide_on_error:
            script = (
                "this.onerror=null;"
                "(this.closest('section')||this).style.display='none';"
            )
        else:
            return ""
        return html.escape(script, quote=True)

    def as_dict(self) -> dict[str, object]:
        return {
            "src": self.src,
            "fallback_src": self.fallback_src,
            "hide_on_error": self.hide_on_error,
        }


def profile_image_slot(src: str | None) -> ImageSlot:
    """Primary profile imagery falls back once to the default portrait."""
    return ImageSlot(src=src or DEFAULT_PROFILE_IMAGE, fallback_src=DEFAULT_PROFILE_IMAGE)


def secondary_image_slot(src: str | None) -> ImageSlot:
    """Secondary imagery hides its section when it cannot be shown."""
    return ImageSlot(src=src, hide_on_error=True)
