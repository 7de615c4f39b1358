"""Admin API endpoints behind the session-cookie admin gate.

Handlers are plain functions, so FastAPI runs them in its threadpool and
overlapping submissions reach the authoring services' operation trackers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Request,
    Response,
    UploadFile,
    status,
)
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse

from makeup_studio.api.deps import (
    clear_session_cookie,
    get_container,
    read_upload,
    require_admin,
    session_token,
)
from makeup_studio.api.request_models import (
    BookingStatusUpdate,
    FAQPayload,
    LeaveRequest,
    ProfileTextUpdate,
    ServicePayload,
)
from makeup_studio.domain.auth import AdminIdentity
from makeup_studio.domain.forms import (
    Banner,
    EditForm,
    ProfileDraft,
    image_input_from_form,
)
from makeup_studio.errors import RepositoryError
from makeup_studio.services.authoring import (
    ALL_CATEGORIES,
    FAQDraft,
    GalleryDraft,
    ServiceDraft,
)
from makeup_studio.services.auth import LOGIN_PATH

router = APIRouter(prefix="/admin", tags=["admin"])

_FIELD_LABELS = {
    "bio": "Bio",
    "bio_2": "Second bio",
    "about_image_1": "About image 1",
    "about_image_2": "About image 2",
}


_GALLERY_FORM = {"title": "", "category": "", "alt_text": "", "image_url": ""}
_SERVICE_FORM = {
    "title": "",
    "description": "",
    "price": "",
    "duration": "",
    "category": "",
    "image_url": "",
}
_FAQ_FORM = {"question": "", "answer": "", "category": "", "display_order": ""}


def _edit_form(
    blank: dict[str, str], records: Sequence[object], edit_id: str | None
) -> dict[str, object]:
    """Form state for the list view; ``edit_id`` loads one listed record."""
    form = EditForm(blank=dict(blank))
    if edit_id:
        record = next((r for r in records if getattr(r, "id", None) == edit_id), None)
        if record is None:
            raise RepositoryError(f"Record {edit_id} not found", not_found=True)
        values = {
            key: "" if value is None else str(value)
            for key, value in asdict(record).items()
        }
        form.begin_edit(edit_id, values)
    return form.as_dict()

def _service_draft(payload: ServicePayload) -> ServiceDraft:
    return ServiceDraft(
        title=payload.title,
        description=payload.description,
        price=str(payload.price),
        duration=str(payload.duration),
        category=payload.category,
        image_url=payload.image_url or "",
        featured=payload.featured,
    )


def _faq_draft(payload: FAQPayload) -> FAQDraft:
    raw_order = payload.display_order
    return FAQDraft(
        question=payload.question,
        answer=payload.answer,
        category=payload.category,
        display_order="" if raw_order is None else str(raw_order),
    )


def _success(message: str, **body: object) -> dict[str, object]:
    return {**jsonable_encoder(body), "banner": Banner.success(message).as_dict()}


@router.get("")
def dashboard(
    request: Request, admin: AdminIdentity = Depends(require_admin)
) -> dict[str, object]:
    """Return the signed-in admin's profile and its editable snapshot."""
    authoring = get_container(request).profile_authoring
    profile = authoring.get_profile(admin)
    return {
        "admin": jsonable_encoder(admin),
        "profile": jsonable_encoder(profile),
        "images": authoring.display_urls(profile),
        "draft": jsonable_encoder(authoring.draft_of(profile)),
    }


@router.post("/leave")
def leave_dashboard(
    payload: LeaveRequest,
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
) -> JSONResponse:
    """Sign out, requiring confirmation when the dashboard has unsaved changes."""
    container = get_container(request)
    draft = ProfileDraft(**payload.model_dump(exclude={"confirm"}))
    if not payload.confirm and container.profile_authoring.has_unsaved_changes(
        admin, draft
    ):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "requires_confirmation": True,
                "detail": "You have unsaved changes. Are you sure you want to leave?",
            },
        )
    container.auth_gate.sign_out(session_token(request))
    response = JSONResponse({"status": "signed_out", "redirect": LOGIN_PATH})
    clear_session_cookie(response, container.settings)
    return response


@router.put("/profile/{field_name}")
def update_profile_text(
    field_name: str,
    payload: ProfileTextUpdate,
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
) -> dict[str, object]:
    """Update ``bio`` or ``bio_2``."""
    profile = get_container(request).profile_authoring.update_text(
        admin, field_name, payload.value
    )
    label = _FIELD_LABELS.get(field_name, field_name)
    return _success(f"{label} updated successfully!", profile=profile)


@router.post("/profile/images/{slot}")
def update_profile_image(
    slot: str,
    request: Request,
    image_url: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
    admin: AdminIdentity = Depends(require_admin),
) -> dict[str, object]:
    """Set an about image from a URL or an uploaded file."""
    authoring = get_container(request).profile_authoring
    image = image_input_from_form(image_url, read_upload(request, file))
    profile = authoring.update_image(admin, slot, image)
    label = _FIELD_LABELS.get(slot, slot)
    return _success(
        f"{label} updated successfully!",
        profile=profile,
        images=authoring.display_urls(profile),
    )


@router.get("/gallery", dependencies=[Depends(require_admin)])
def list_gallery(
    request: Request, category: str = ALL_CATEGORIES, edit: str | None = None
) -> dict[str, object]:
    """Return gallery images with display URLs."""
    authoring = get_container(request).gallery_authoring
    images, image_categories = authoring.list_images(category)
    return {
        "images": [
            {**jsonable_encoder(image), "display_url": authoring.display_url(image)}
            for image in images
        ],
        "categories": image_categories,
        "form": _edit_form(_GALLERY_FORM, images, edit),
    }


@router.post(
    "/gallery",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_gallery_image(  # noqa: PLR0913
    request: Request,
    title: str = Form(default=""),
    category: str = Form(default=""),
    alt_text: str = Form(default=""),
    image_url: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
) -> dict[str, object]:
    """Create a gallery image from a URL or an uploaded file."""
    image = image_input_from_form(image_url, read_upload(request, file))
    created = get_container(request).gallery_authoring.create(
        GalleryDraft(title=title, category=category, alt_text=alt_text), image
    )
    return _success("Image added to gallery successfully!", image=created)


@router.put("/gallery/{image_id}", dependencies=[Depends(require_admin)])
def update_gallery_image(  # noqa: PLR0913
    image_id: str,
    request: Request,
    title: str = Form(default=""),
    category: str = Form(default=""),
    alt_text: str = Form(default=""),
    image_url: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
) -> dict[str, object]:
    """Update a gallery image; a new file replaces the stored object."""
    image = image_input_from_form(image_url, read_upload(request, file))
    updated = get_container(request).gallery_authoring.update(
        image_id,
        GalleryDraft(title=title, category=category, alt_text=alt_text),
        image,
    )
    return _success("Gallery image updated successfully!", image=updated)


@router.delete("/gallery/{image_id}", dependencies=[Depends(require_admin)])
def delete_gallery_image(image_id: str, request: Request) -> dict[str, object]:
    """Delete a gallery image and its stored object."""
    get_container(request).gallery_authoring.delete(image_id)
    return _success("Gallery image deleted successfully!")


@router.get("/services", dependencies=[Depends(require_admin)])
def list_services(
    request: Request, category: str = ALL_CATEGORIES, edit: str | None = None
) -> dict[str, object]:
    """Return services with the category list."""
    authoring = get_container(request).service_authoring
    services, service_categories = authoring.list_services(category)
    return {
        "services": jsonable_encoder(services),
        "categories": service_categories,
        "form": _edit_form(_SERVICE_FORM, services, edit),
    }


@router.post(
    "/services",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_service(payload: ServicePayload, request: Request) -> dict[str, object]:
    """Create a service."""
    created = get_container(request).service_authoring.create(_service_draft(payload))
    return _success("Service created successfully!", service=created)


@router.put("/services/{service_id}", dependencies=[Depends(require_admin)])
def update_service(
    service_id: str, payload: ServicePayload, request: Request
) -> dict[str, object]:
    """Update a service."""
    updated = get_container(request).service_authoring.update(
        service_id, _service_draft(payload)
    )
    return _success("Service updated successfully!", service=updated)


@router.delete("/services/{service_id}", dependencies=[Depends(require_admin)])
def delete_service(service_id: str, request: Request) -> dict[str, object]:
    """Delete a service."""
    get_container(request).service_authoring.delete(service_id)
    return _success("Service deleted successfully!")


@router.get("/faqs", dependencies=[Depends(require_admin)])
def list_faqs(
    request: Request, category: str = ALL_CATEGORIES, edit: str | None = None
) -> dict[str, object]:
    """Return FAQs with the category list."""
    faqs, faq_categories = get_container(request).faq_authoring.list_faqs(category)
    return {
        "faqs": jsonable_encoder(faqs),
        "categories": faq_categories,
        "form": _edit_form(_FAQ_FORM, faqs, edit),
    }


@router.post(
    "/faqs",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_faq(payload: FAQPayload, request: Request) -> dict[str, object]:
    """Create an FAQ."""
    created = get_container(request).faq_authoring.create(_faq_draft(payload))
    return _success("FAQ created successfully!", faq=created)


@router.put("/faqs/{faq_id}", dependencies=[Depends(require_admin)])
def update_faq(
    faq_id: str, payload: FAQPayload, request: Request
) -> dict[str, object]:
    """Update an FAQ."""
    updated = get_container(request).faq_authoring.update(faq_id, _faq_draft(payload))
    return _success("FAQ updated successfully!", faq=updated)


@router.delete("/faqs/{faq_id}", dependencies=[Depends(require_admin)])
def delete_faq(faq_id: str, request: Request) -> dict[str, object]:
    """Delete an FAQ."""
    get_container(request).faq_authoring.delete(faq_id)
    return _success("FAQ deleted successfully!")


@router.get("/bookings", dependencies=[Depends(require_admin)])
def list_bookings(request: Request, limit: int = 50) -> dict[str, object]:
    """Return recent booking requests."""
    bookings = get_container(request).booking_service.list_bookings(limit)
    return {"bookings": jsonable_encoder(bookings)}


@router.patch("/bookings/{booking_id}", dependencies=[Depends(require_admin)])
def update_booking_status(
    booking_id: str, payload: BookingStatusUpdate, request: Request
) -> dict[str, object]:
    """Set the status of a booking."""
    booking = get_container(request).booking_service.update_status(
        booking_id, payload.status
    )
    return _success(f"Booking marked {booking.status.value}.", booking=booking)


@router.post("/bookings/{booking_id}/cancel", dependencies=[Depends(require_admin)])
def cancel_booking(booking_id: str, request: Request) -> dict[str, object]:
    """Cancel a booking."""
    booking = get_container(request).booking_service.cancel(booking_id)
    return _success("Booking cancelled.", booking=booking)


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> Response:
    """Minimal admin UI that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Studio Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      textarea { width: 480px; height: 6rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
      #banner { min-height: 1.5rem; }
      .error { color: #b00020; }
      .success { color: #1b5e20; }
    </style>
  </head>
  <body>
    <h1>Studio Admin</h1>
    <div id="banner"></div>
    <div class="row">
      <label>Bio</label><br />
      <textarea id="bio"></textarea><br />
      <button onclick="saveText('bio')">Save Bio</button>
    </div>
    <div class="row">
      <label>Second bio</label><br />
      <textarea id="bio_2"></textarea><br />
      <button onclick="saveText('bio_2')">Save Second Bio</button>
    </div>
    <div class="row">
      <button onclick="loadEndpoint('/admin/gallery')">Gallery</button>
      <button onclick="loadEndpoint('/admin/services')">Services</button>
      <button onclick="loadEndpoint('/admin/faqs')">FAQs</button>
      <button onclick="loadEndpoint('/admin/bookings')">Bookings</button>
      <button onclick="leave(false)">Sign out</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      let initial = null;
      let busy = false;
      function show(banner) {
        const el = document.getElementById('banner');
        el.className = banner.type;
        el.textContent = banner.text;
        setTimeout(() => { el.textContent = ''; }, banner.dismiss_after_ms);
      }
      function draft() {
        return {
          bio: document.getElementById('bio').value,
          bio_2: document.getElementById('bio_2').value,
          about_image_1: initial ? initial.about_image_1 : '',
          about_image_2: initial ? initial.about_image_2 : ''
        };
      }
      function dirty() {
        if (!initial) return false;
        const current = draft();
        return current.bio !== initial.bio || current.bio_2 !== initial.bio_2;
      }
      window.addEventListener('beforeunload', (event) => {
        if (dirty()) { event.preventDefault(); event.returnValue = ''; }
      });
      async function load() {
        const res = await fetch('/admin');
        if (res.redirected) { location.href = res.url; return; }
        const data = await res.json();
        initial = data.draft;
        document.getElementById('bio').value = initial.bio;
        document.getElementById('bio_2').value = initial.bio_2;
      }
      async function saveText(field) {
        if (busy) return;
        busy = true;
        try {
          const res = await fetch('/admin/profile/' + field, {
            method: 'PUT',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ value: document.getElementById(field).value })
          });
          const data = await res.json();
          if (data.banner) show(data.banner);
          if (res.ok) await load();
        } finally {
          busy = false;
        }
      }
      async function loadEndpoint(path) {
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch(path);
        if (res.redirected) { location.href = res.url; return; }
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }
      async function leave(confirmed) {
        const res = await fetch('/admin/leave', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ ...draft(), confirm: confirmed })
        });
        const data = await res.json();
        if (res.status === 409 && data.requires_confirmation) {
          if (window.confirm(data.detail)) await leave(true);
          return;
        }
        if (data.redirect) { initial = null; location.href = data.redirect; }
      }
      load();
    </script>
  </body>
</html>
"""
