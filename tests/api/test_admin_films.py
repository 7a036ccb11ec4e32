"""Tests for the admin film management endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from reelfolio.api.deps import get_storage
from reelfolio.services import storage
from reelfolio.services.storage import UploadError

NEW_FILM = {
    "title": "The Director's Cut!",
    "short_description": "A short film.",
    "release_year": 2024,
    "credits": {"director": "Bala"},
}


@pytest.fixture
def storage_client() -> MagicMock:
    client = MagicMock()
    client.upload = AsyncMock()
    return client


@pytest.fixture
def app(admin_app: FastAPI, storage_client: MagicMock) -> FastAPI:
    admin_app.dependency_overrides[get_storage] = lambda: storage_client
    return admin_app


@pytest.fixture
async def client(app: FastAPI):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def film(client: AsyncClient) -> dict:
    response = await client.post("/api/admin/films", json=NEW_FILM)
    assert response.status_code == 201
    return response.json()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


async def test_create_derives_slug(film: dict) -> None:
    assert film["slug"] == "the-directors-cut"
    assert film["credits"]["director"] == "Bala"
    assert film["gallery_images"] == []


async def test_duplicate_slug_is_409(client: AsyncClient, film: dict) -> None:
    response = await client.post("/api/admin/films", json=NEW_FILM)

    assert response.status_code == 409
    assert "the-directors-cut" in response.json()["detail"]


async def test_invalid_film_is_422(client: AsyncClient) -> None:
    response = await client.post("/api/admin/films", json={"title": "Echoes", "trailer_url": "not a url"})
    assert response.status_code == 422


async def test_replace_with_stored_slug(client: AsyncClient, film: dict) -> None:
    response = await client.put(
        f"/api/admin/films/{film['id']}",
        json={**NEW_FILM, "title": "Renamed", "slug": film["slug"], "is_featured": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Renamed"
    assert body["slug"] == "the-directors-cut"
    assert body["is_featured"] is True


@pytest.mark.parametrize("slug_field", [{}, {"slug": ""}, {"slug": "   "}])
async def test_replace_without_slug_keeps_stored_slug(
    client: AsyncClient, film: dict, slug_field: dict
) -> None:
    response = await client.put(
        f"/api/admin/films/{film['id']}",
        json={**NEW_FILM, "title": "Renamed Later", **slug_field},
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed Later"
    assert response.json()["slug"] == "the-directors-cut"

    public = await client.get("/api/films/the-directors-cut")
    assert public.status_code == 200
    assert public.json()["title"] == "Renamed Later"


async def test_replace_with_new_slug_renames(client: AsyncClient, film: dict) -> None:
    response = await client.put(
        f"/api/admin/films/{film['id']}",
        json={**NEW_FILM, "slug": "directors-cut-2024"},
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "directors-cut-2024"


async def test_reserved_slug_is_422(client: AsyncClient) -> None:
    response = await client.post("/api/admin/films", json={"title": "Featured"})
    assert response.status_code == 422


async def test_long_title_gets_bounded_slug(client: AsyncClient) -> None:
    response = await client.post("/api/admin/films", json={"title": "word " * 60})

    assert response.status_code == 201
    assert len(response.json()["slug"]) <= 200


async def test_replace_unknown_film_is_404(client: AsyncClient) -> None:
    response = await client.put("/api/admin/films/missing", json=NEW_FILM)
    assert response.status_code == 404


async def test_delete(client: AsyncClient, film: dict) -> None:
    response = await client.delete(f"/api/admin/films/{film['id']}")
    assert response.status_code == 204

    missing = await client.get(f"/api/admin/films/{film['id']}")
    assert missing.status_code == 404


# ---------------------------------------------------------------------------
# Reviews and articles
# ---------------------------------------------------------------------------


async def test_review_lifecycle(client: AsyncClient, film: dict) -> None:
    added = await client.post(
        f"/api/admin/films/{film['id']}/reviews",
        json={"review_text": "Haunting.", "publication": "Sight"},
    )
    assert added.status_code == 201
    reviews = added.json()["reviews"]
    assert len(reviews) == 1
    entry_id = reviews[0]["id"]

    updated = await client.patch(
        f"/api/admin/films/{film['id']}/reviews/{entry_id}",
        json={"reviewer_name": "A. Critic"},
    )
    assert updated.status_code == 200
    assert updated.json()["reviews"][0]["reviewer_name"] == "A. Critic"
    assert updated.json()["reviews"][0]["review_text"] == "Haunting."

    removed = await client.delete(f"/api/admin/films/{film['id']}/reviews/{entry_id}")
    assert removed.status_code == 200
    assert removed.json()["reviews"] == []


async def test_review_without_text_is_422(client: AsyncClient, film: dict) -> None:
    response = await client.post(f"/api/admin/films/{film['id']}/reviews", json={"reviewer_name": "X"})
    assert response.status_code == 422


async def test_unknown_entry_is_404(client: AsyncClient, film: dict) -> None:
    response = await client.delete(f"/api/admin/films/{film['id']}/articles/nope")
    assert response.status_code == 404


async def test_articles_keep_order(client: AsyncClient, film: dict) -> None:
    for title in ["First", "Second", "Third"]:
        response = await client.post(f"/api/admin/films/{film['id']}/articles", json={"article_title": title})
        assert response.status_code == 201

    articles = response.json()["articles"]
    assert [a["article_title"] for a in articles] == ["First", "Second", "Third"]

    removed = await client.delete(f"/api/admin/films/{film['id']}/articles/{articles[1]['id']}")
    assert [a["article_title"] for a in removed.json()["articles"]] == ["First", "Third"]


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


async def test_thumbnail_upload(client: AsyncClient, film: dict, storage_client: MagicMock) -> None:
    storage_client.upload.return_value = "https://cdn.test/thumb.jpg"

    response = await client.post(
        f"/api/admin/films/{film['id']}/thumbnail",
        files={"file": ("thumb.jpg", b"jpegbytes", "image/jpeg")},
    )

    assert response.status_code == 200
    assert response.json()["thumbnail_url"] == "https://cdn.test/thumb.jpg"
    bucket, filename, content, content_type = storage_client.upload.await_args.args
    assert bucket == storage.THUMBNAILS
    assert (filename, content, content_type) == ("thumb.jpg", b"jpegbytes", "image/jpeg")


async def test_rejected_thumbnail_is_400(client: AsyncClient, film: dict, storage_client: MagicMock) -> None:
    storage_client.upload.side_effect = UploadError("thumb.gif", "file is empty")

    response = await client.post(
        f"/api/admin/films/{film['id']}/thumbnail",
        files={"file": ("thumb.gif", b"", "image/gif")},
    )

    assert response.status_code == 400


async def test_gallery_upload_partial_success(client: AsyncClient, film: dict, storage_client: MagicMock) -> None:
    storage_client.upload.side_effect = [
        "https://cdn.test/1.jpg",
        UploadError("2.jpg", "storage returned 500"),
        "https://cdn.test/3.jpg",
    ]

    response = await client.post(
        f"/api/admin/films/{film['id']}/gallery",
        files=[
            ("files", ("1.jpg", b"one", "image/jpeg")),
            ("files", ("2.jpg", b"two", "image/jpeg")),
            ("files", ("3.jpg", b"three", "image/jpeg")),
        ],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["uploaded"] == ["https://cdn.test/1.jpg", "https://cdn.test/3.jpg"]
    assert body["failed"] == [{"filename": "2.jpg", "error": "storage returned 500"}]
    assert body["film"]["gallery_images"] == ["https://cdn.test/1.jpg", "https://cdn.test/3.jpg"]

    removed = await client.delete(f"/api/admin/films/{film['id']}/gallery/0")
    assert removed.json()["gallery_images"] == ["https://cdn.test/3.jpg"]


async def test_remove_missing_gallery_image_is_404(client: AsyncClient, film: dict) -> None:
    response = await client.delete(f"/api/admin/films/{film['id']}/gallery/3")
    assert response.status_code == 404


async def test_pre_record_upload_to_bucket(client: AsyncClient, storage_client: MagicMock) -> None:
    storage_client.upload.return_value = "https://cdn.test/new-thumb.jpg"

    response = await client.post(
        "/api/admin/uploads/film-thumbnails",
        files={"file": ("t.jpg", b"jpg", "image/jpeg")},
    )

    assert response.status_code == 200
    assert response.json() == {"url": "https://cdn.test/new-thumb.jpg"}


async def test_upload_to_unknown_bucket_is_404(client: AsyncClient) -> None:
    response = await client.post("/api/admin/uploads/secrets", files={"file": ("t.jpg", b"jpg", "image/jpeg")})
    assert response.status_code == 404


async def test_negative_gallery_index_is_404(client: AsyncClient, film: dict, storage_client: MagicMock) -> None:
    storage_client.upload.side_effect = ["https://cdn.test/1.jpg", "https://cdn.test/2.jpg"]
    await client.post(
        f"/api/admin/films/{film['id']}/gallery",
        files=[
            ("files", ("1.jpg", b"one", "image/jpeg")),
            ("files", ("2.jpg", b"two", "image/jpeg")),
        ],
    )

    response = await client.delete(f"/api/admin/films/{film['id']}/gallery/-1")
    stored = await client.get(f"/api/admin/films/{film['id']}")

    assert response.status_code == 404
    assert stored.json()["gallery_images"] == ["https://cdn.test/1.jpg", "https://cdn.test/2.jpg"]
