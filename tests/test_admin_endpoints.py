"""Tests for admin endpoints."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from makeup_studio.api.app import create_app
from tests.conftest import (
    PUBLIC_URL_BASE,
    FakeAssetStore,
    FakeAuthProvider,
    InMemoryGalleryRepository,
    InMemoryProfileRepository,
    InMemoryServiceRepository,
    make_service,
    seed_admin,
)

_GALLERY_FORM = {"title": "Soft glam", "category": "bridal", "alt_text": "Bride"}
_JPEG = ("look.jpg", b"jpeg-bytes", "image/jpeg")


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def admin_client(
    container,
    client: TestClient,
    auth_provider: FakeAuthProvider,
    profile_repository: InMemoryProfileRepository,
) -> TestClient:
    token = seed_admin(auth_provider, profile_repository)
    client.cookies.set(container.settings.session_cookie_name, token)
    return client


def test_dashboard_requires_session(client: TestClient) -> None:
    response = client.get("/admin", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_dashboard_redirects_and_signs_out_non_admin(
    container, client: TestClient, auth_provider: FakeAuthProvider
) -> None:
    provider = auth_provider
    token = provider.issue_token(provider.add_account("guest@example.com"))
    client.cookies.set(container.settings.session_cookie_name, token)

    response = client.get("/admin", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login?error=unauthorized"
    assert provider.signed_out == [token]


def test_dashboard_returns_profile(admin_client: TestClient) -> None:
    response = admin_client.get("/admin")

    assert response.status_code == 200
    data = response.json()
    assert data["admin"]["email"] == "admin@example.com"
    assert data["draft"]["bio"] == ""
    assert data["images"] == {"about_image_1": None, "about_image_2": None}


def test_update_bio(admin_client: TestClient) -> None:
    response = admin_client.put("/admin/profile/bio", json={"value": "Hello"})

    assert response.status_code == 200
    data = response.json()
    assert data["profile"]["bio"] == "Hello"
    assert data["banner"]["text"] == "Bio updated successfully!"
    assert data["banner"]["dismiss_after_ms"] == 3000


def test_update_unknown_profile_field(admin_client: TestClient) -> None:
    response = admin_client.put("/admin/profile/email", json={"value": "x"})

    assert response.status_code == 422
    assert response.json()["banner"]["type"] == "error"


def test_upload_profile_image(
    admin_client: TestClient, asset_store: FakeAssetStore
) -> None:
    response = admin_client.post(
        "/admin/profile/images/about_image_1", files={"file": _JPEG}
    )

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["about_image_1_path"].startswith("about/")
    assert profile["about_image_1"] == f"{PUBLIC_URL_BASE}{profile['about_image_1_path']}"
    assert asset_store.uploads == [profile["about_image_1_path"]]


def test_profile_image_requires_input(admin_client: TestClient) -> None:
    response = admin_client.post("/admin/profile/images/about_image_2", data={})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter an image URL or choose a file"


def test_upload_rejects_oversized_file(container, admin_client: TestClient) -> None:
    container.assets.max_upload_bytes = 4

    response = admin_client.post(
        "/admin/profile/images/about_image_1", files={"file": _JPEG}
    )

    assert response.status_code == 413


def test_leave_requires_confirmation_for_unsaved_changes(
    admin_client: TestClient, auth_provider: FakeAuthProvider
) -> None:
    response = admin_client.post("/admin/leave", json={"bio": "Draft text"})

    assert response.status_code == 409
    assert response.json()["requires_confirmation"] is True

    confirmed = admin_client.post(
        "/admin/leave", json={"bio": "Draft text", "confirm": True}
    )

    assert confirmed.status_code == 200
    assert confirmed.json()["redirect"] == "/login"
    assert len(auth_provider.signed_out) == 1


def test_leave_without_changes(admin_client: TestClient) -> None:
    response = admin_client.post("/admin/leave", json={})

    assert response.status_code == 200
    assert response.json()["status"] == "signed_out"


def test_gallery_create_with_file(
    admin_client: TestClient, gallery_repository: InMemoryGalleryRepository
) -> None:
    response = admin_client.post(
        "/admin/gallery", data=_GALLERY_FORM, files={"file": _JPEG}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["image"]["image_path"].startswith("gallery/")
    assert data["banner"]["text"] == "Image added to gallery successfully!"
    assert len(gallery_repository.images) == 1


def test_gallery_create_with_url_then_list(admin_client: TestClient) -> None:
    created = admin_client.post(
        "/admin/gallery",
        data={**_GALLERY_FORM, "image_url": "https://images.example.test/a.jpg"},
    )
    listed = admin_client.get("/admin/gallery", params={"category": "bridal"})

    assert created.status_code == 201
    assert listed.status_code == 200
    data = listed.json()
    assert data["categories"] == ["bridal"]
    assert data["images"][0]["display_url"] == "https://images.example.test/a.jpg"


def test_gallery_create_validation(
    admin_client: TestClient, gallery_repository: InMemoryGalleryRepository
) -> None:
    response = admin_client.post(
        "/admin/gallery", data={**_GALLERY_FORM, "title": " "}, files={"file": _JPEG}
    )

    assert response.status_code == 422
    assert response.json()["field"] == "title"
    assert gallery_repository.images == {}


def test_gallery_update_and_delete(
    admin_client: TestClient, asset_store: FakeAssetStore
) -> None:
    created = admin_client.post(
        "/admin/gallery", data=_GALLERY_FORM, files={"file": _JPEG}
    ).json()["image"]

    updated = admin_client.put(
        f"/admin/gallery/{created['id']}",
        data={**_GALLERY_FORM, "image_url": "https://images.example.test/b.jpg"},
    )
    deleted = admin_client.delete(f"/admin/gallery/{created['id']}")

    assert updated.status_code == 200
    assert updated.json()["image"]["image_path"] is None
    assert asset_store.removed == [created["image_path"]]
    assert deleted.json()["banner"]["text"] == "Gallery image deleted successfully!"


def test_gallery_update_missing(admin_client: TestClient) -> None:
    response = admin_client.put("/admin/gallery/missing", data=_GALLERY_FORM)

    assert response.status_code == 404


def test_overlapping_gallery_submissions_conflict(
    admin_client: TestClient,
    gallery_repository: InMemoryGalleryRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    entered, release = threading.Event(), threading.Event()
    create_image = gallery_repository.create_image

    def slow_create(payload: dict[str, object]) -> object:
        entered.set()
        release.wait(timeout=5)
        return create_image(payload)

    monkeypatch.setattr(gallery_repository, "create_image", slow_create)
    form = {**_GALLERY_FORM, "image_url": "https://images.example.test/a.jpg"}

    with ThreadPoolExecutor(max_workers=1) as pool:
        pending = pool.submit(admin_client.post, "/admin/gallery", data=form)
        assert entered.wait(timeout=5)
        second = admin_client.post("/admin/gallery", data=form)
        release.set()
        first = pending.result(timeout=5)

    assert second.status_code == 409
    assert second.json()["banner"]["type"] == "error"
    assert first.status_code == 201
    assert len(gallery_repository.images) == 1


def test_service_crud(
    admin_client: TestClient, service_repository: InMemoryServiceRepository
) -> None:
    payload = {
        "title": "Bridal Makeup",
        "description": "Full look",
        "price": "250",
        "duration": 90,
        "category": "bridal",
    }
    created = admin_client.post("/admin/services", json=payload)
    service_id = created.json()["service"]["id"]
    updated = admin_client.put(
        f"/admin/services/{service_id}", json={**payload, "price": 275.5}
    )
    listed = admin_client.get("/admin/services")
    deleted = admin_client.delete(f"/admin/services/{service_id}")

    assert created.status_code == 201
    assert created.json()["banner"]["text"] == "Service created successfully!"
    assert updated.json()["service"]["price"] == 275.5
    assert listed.json()["categories"] == ["bridal"]
    assert deleted.status_code == 200
    assert service_repository.services == {}


def test_service_rejects_negative_price(admin_client: TestClient) -> None:
    response = admin_client.post(
        "/admin/services",
        json={
            "title": "Bridal",
            "description": "d",
            "price": -5,
            "duration": 60,
            "category": "bridal",
        },
    )

    assert response.status_code == 422
    assert response.json()["field"] == "price"


def test_faq_crud(admin_client: TestClient) -> None:
    first = admin_client.post(
        "/admin/faqs", json={"question": "t1?", "answer": "a", "category": "Services"}
    ).json()["faq"]
    second = admin_client.post(
        "/admin/faqs",
        json={"question": "t2?", "answer": "a", "category": "Services", "display_order": 0},
    ).json()["faq"]
    admin_client.put(
        f"/admin/faqs/{first['id']}",
        json={"question": "t1?", "answer": "a", "category": "Booking", "display_order": 5},
    )

    listed = admin_client.get("/admin/faqs").json()

    assert [faq["id"] for faq in listed["faqs"]] == [second["id"], first["id"]]
    assert listed["categories"] == ["Services", "Booking"]


def test_booking_status_endpoints(
    container, admin_client: TestClient, service_repository: InMemoryServiceRepository
) -> None:
    service = make_service()
    service_repository.services[service.id] = service
    created = admin_client.post(
        "/bookings",
        json={
            "client_name": "Ana",
            "client_email": "ana@example.com",
            "client_phone": "555",
            "service_id": service.id,
            "booking_date": "2024-06-01",
            "start_time": "14:00",
        },
    ).json()["booking"]

    confirmed = admin_client.patch(
        f"/admin/bookings/{created['id']}", json={"status": "confirmed"}
    )
    cancelled = admin_client.post(f"/admin/bookings/{created['id']}/cancel")
    listed = admin_client.get("/admin/bookings")

    assert confirmed.json()["booking"]["status"] == "confirmed"
    assert confirmed.json()["banner"]["text"] == "Booking marked confirmed."
    assert cancelled.json()["booking"]["status"] == "cancelled"
    assert listed.json()["bookings"][0]["id"] == created["id"]


def test_admin_endpoints_reject_anonymous(client: TestClient) -> None:
    response = client.delete("/admin/services/any", follow_redirects=False)

    assert response.status_code == 303


def test_admin_ui_page(client: TestClient) -> None:
    response = client.get("/admin/ui")

    assert response.status_code == 200
    assert "beforeunload" in response.text


def test_service_list_loads_edit_form(
    admin_client: TestClient, service_repository: InMemoryServiceRepository
) -> None:
    service = make_service(title="Bridal Makeup")
    service_repository.services[service.id] = service

    blank = admin_client.get("/admin/services").json()["form"]
    editing = admin_client.get("/admin/services", params={"edit": service.id}).json()
    missing = admin_client.get("/admin/services", params={"edit": "gone"})

    assert blank["action"] == "create"
    assert blank["fields"]["title"] == ""
    assert editing["form"]["action"] == "update"
    assert editing["form"]["editing_id"] == service.id
    assert editing["form"]["anchor"] == "edit-form"
    assert editing["form"]["fields"]["title"] == "Bridal Makeup"
    assert editing["form"]["fields"]["price"] == "250"
    assert missing.status_code == 404


def test_faq_list_edit_form_blank_display_order(admin_client: TestClient) -> None:
    created = admin_client.post(
        "/admin/faqs", json={"question": "t1?", "answer": "a", "category": "Services"}
    ).json()["faq"]

    form = admin_client.get("/admin/faqs", params={"edit": created["id"]}).json()["form"]

    assert form["fields"] == {
        "question": "t1?",
        "answer": "a",
        "category": "Services",
        "display_order": "0",
    }
