"""Unit tests for the film editor working copy."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from reelfolio.models.film import Film
from reelfolio.services import storage
from reelfolio.services.film_editor import FilmEditor, IncomingFile, UploadInProgressError
from reelfolio.services.storage import UploadError


def make_film(**overrides) -> Film:
    fields = {
        "id": "film-1",
        "slug": "echoes",
        "title": "Echoes",
        "release_year": 2023,
        "is_featured": False,
        "gallery_images": ["https://img.test/1.jpg"],
        "credits": {"director": "Bala"},
        "reviews": [{"id": "r1", "review_text": "Moving."}],
        "articles": [],
    }
    fields.update(overrides)
    return Film(**fields)


def make_storage(urls: list | None = None) -> MagicMock:
    client = MagicMock()
    client.upload = AsyncMock(side_effect=urls or ["https://cdn.test/file.jpg"])
    return client


def image(name: str = "still.jpg") -> IncomingFile:
    return IncomingFile(name, b"jpegbytes", "image/jpeg")


# ---------------------------------------------------------------------------
# Titles and slugs
# ---------------------------------------------------------------------------


class TestSlugRules:
    def test_title_regenerates_slug_for_new_film(self) -> None:
        editor = FilmEditor.blank()
        editor.set_title("The Director's Cut!")
        assert editor.values["slug"] == "the-directors-cut"

    def test_title_keeps_slug_for_existing_film(self) -> None:
        editor = FilmEditor.from_record(make_film())
        editor.set_title("Echoes Reborn")
        assert editor.values["title"] == "Echoes Reborn"
        assert editor.values["slug"] == "echoes"

    def test_set_field_title_goes_through_slug_rule(self) -> None:
        editor = FilmEditor.blank()
        editor.set_field("title", "Night Train")
        assert editor.values["slug"] == "night-train"

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(KeyError):
            FilmEditor.blank().set_field("runtime", 90)


class TestBlank:
    def test_blank_has_every_credit_empty(self) -> None:
        editor = FilmEditor.blank()
        assert all(value == "" for value in editor.values["credits"].values())
        assert "catering" in editor.values["credits"]

    def test_blank_cannot_be_saved_without_title(self) -> None:
        with pytest.raises(ValidationError):
            FilmEditor.blank().to_payload()


# ---------------------------------------------------------------------------
# Reviews and articles
# ---------------------------------------------------------------------------


class TestEntries:
    def test_add_review_appends_with_id(self) -> None:
        editor = FilmEditor.from_record(make_film())
        entry_id = editor.add_review(review_text="Haunting.", publication="Sight & Sound")
        assert len(editor.reviews) == 2
        assert editor.reviews[1]["id"] == entry_id
        assert editor.reviews[1]["reviewer_name"] == ""

    def test_remove_review_by_index_keeps_order(self) -> None:
        editor = FilmEditor.from_record(make_film())
        editor.add_review(review_text="Second")
        editor.add_review(review_text="Third")
        editor.remove_review(1)
        assert [r["review_text"] for r in editor.reviews] == ["Moving.", "Third"]

    def test_update_review_by_id(self) -> None:
        editor = FilmEditor.from_record(make_film())
        editor.update_review_by_id("r1", "reviewer_name", "A. Critic")
        assert editor.reviews[0]["reviewer_name"] == "A. Critic"

    def test_unknown_entry_id(self) -> None:
        editor = FilmEditor.from_record(make_film())
        with pytest.raises(KeyError):
            editor.remove_review_by_id("missing")

    def test_unknown_entry_field(self) -> None:
        editor = FilmEditor.from_record(make_film())
        with pytest.raises(KeyError):
            editor.update_review(0, "rating", "5")
        with pytest.raises(KeyError):
            editor.add_article(article_title="x", author="y")

    def test_articles_add_update_remove(self) -> None:
        editor = FilmEditor.from_record(make_film())
        first = editor.add_article(article_title="Interview", source="Variety")
        editor.add_article(article_title="Profile")
        editor.update_article_by_id(first, "date", "2024-03-01")
        assert editor.articles[0]["date"] == "2024-03-01"
        editor.remove_article_by_id(first)
        assert [a["article_title"] for a in editor.articles] == ["Profile"]

    def test_negative_index_is_not_an_alias(self) -> None:
        editor = FilmEditor.from_record(make_film(articles=[{"id": "a1", "article_title": "Profile"}]))
        with pytest.raises(IndexError):
            editor.remove_review(-1)
        with pytest.raises(IndexError):
            editor.update_article(-1, "source", "Variety")
        with pytest.raises(IndexError):
            editor.remove_gallery_image(-1)
        assert len(editor.reviews) == 1
        assert editor.articles[0]["source"] == ""
        assert editor.gallery_images == ["https://img.test/1.jpg"]

    def test_payload_contains_entries(self) -> None:
        editor = FilmEditor.from_record(make_film())
        editor.add_article(article_title="Interview")
        payload = editor.to_payload()
        assert [r.id for r in payload.reviews] == ["r1"]
        assert payload.articles[0].article_title == "Interview"


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


class TestUploads:
    async def test_thumbnail_upload_sets_url(self) -> None:
        client = make_storage(["https://cdn.test/thumb.jpg"])
        editor = FilmEditor.from_record(make_film(), client)
        url = await editor.upload_thumbnail(image())
        assert url == "https://cdn.test/thumb.jpg"
        assert editor.values["thumbnail_url"] == url
        client.upload.assert_awaited_once_with(storage.THUMBNAILS, "still.jpg", b"jpegbytes", "image/jpeg")

    async def test_pitch_deck_goes_to_documents(self) -> None:
        client = make_storage(["https://cdn.test/deck.pdf"])
        editor = FilmEditor.from_record(make_film(), client)
        await editor.upload_pitch_deck(IncomingFile("deck.pdf", b"%PDF", "application/pdf"))
        assert editor.values["pitch_deck_url"] == "https://cdn.test/deck.pdf"
        assert client.upload.await_args.args[0] == storage.DOCUMENTS

    async def test_gallery_upload_partial_success(self) -> None:
        client = make_storage(
            [
                "https://cdn.test/a.jpg",
                UploadError("b.jpg", "storage returned 500"),
                "https://cdn.test/c.jpg",
            ]
        )
        editor = FilmEditor.from_record(make_film(), client)
        result = await editor.upload_gallery([image("a.jpg"), image("b.jpg"), image("c.jpg")])

        assert result.uploaded == ["https://cdn.test/a.jpg", "https://cdn.test/c.jpg"]
        assert [e.filename for e in result.failed] == ["b.jpg"]
        assert editor.gallery_images == [
            "https://img.test/1.jpg",
            "https://cdn.test/a.jpg",
            "https://cdn.test/c.jpg",
        ]
        assert not editor.is_uploading

    async def test_failed_thumbnail_leaves_url_unchanged(self) -> None:
        client = make_storage([UploadError("x.jpg", "file is empty")])
        editor = FilmEditor.from_record(make_film(thumbnail_url="https://img.test/old.jpg"), client)
        with pytest.raises(UploadError):
            await editor.upload_thumbnail(image("x.jpg"))
        assert editor.values["thumbnail_url"] == "https://img.test/old.jpg"
        assert editor.can_submit

    async def test_save_blocked_while_uploading(self) -> None:
        release = asyncio.Event()

        async def slow_upload(*args):
            await release.wait()
            return "https://cdn.test/slow.jpg"

        client = MagicMock()
        client.upload = AsyncMock(side_effect=slow_upload)
        editor = FilmEditor.from_record(make_film(), client)
        repo = MagicMock()
        repo.save = AsyncMock()

        task = asyncio.create_task(editor.upload_thumbnail(image()))
        await asyncio.sleep(0)
        assert editor.is_uploading
        assert not editor.can_submit
        with pytest.raises(UploadInProgressError):
            await editor.save(repo)
        repo.save.assert_not_awaited()

        release.set()
        await task
        assert editor.can_submit

    async def test_same_slot_cannot_run_twice(self) -> None:
        release = asyncio.Event()

        async def slow_upload(*args):
            await release.wait()
            return "https://cdn.test/slow.jpg"

        client = MagicMock()
        client.upload = AsyncMock(side_effect=slow_upload)
        editor = FilmEditor.from_record(make_film(), client)

        task = asyncio.create_task(editor.upload_thumbnail(image()))
        await asyncio.sleep(0)
        with pytest.raises(UploadInProgressError):
            await editor.upload_thumbnail(image())
        release.set()
        await task


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------


class TestSave:
    async def test_new_film_adopts_saved_id(self) -> None:
        saved = make_film(id="new-id", slug="night-train", title="Night Train", reviews=[])
        repo = MagicMock()
        repo.save = AsyncMock(return_value=saved)

        editor = FilmEditor.blank()
        editor.set_title("Night Train")
        film = await editor.save(repo)

        assert film is saved
        assert editor.film_id == "new-id"
        payload, film_id = repo.save.await_args.args
        assert payload.slug == "night-train"
        assert film_id is None

        # Once saved, renaming no longer touches the slug
        editor.set_title("Night Train II")
        assert editor.values["slug"] == "night-train"

    async def test_existing_film_saved_by_id(self) -> None:
        film = make_film()
        repo = MagicMock()
        repo.save = AsyncMock(return_value=film)

        editor = FilmEditor.from_record(film)
        editor.set_credit("editor", "Sam")
        await editor.save(repo)

        payload, film_id = repo.save.await_args.args
        assert film_id == "film-1"
        assert payload.credits.editor == "Sam"

    def test_unknown_credit_key(self) -> None:
        with pytest.raises(KeyError):
            FilmEditor.blank().set_credit("stunts", "Alex")
