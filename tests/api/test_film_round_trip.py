"""A film written through the admin API reads back identically on the public side."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

FULL_FILM = {
    "title": "The Last Frame",
    "slug": "",
    "short_description": "A projectionist's final night.",
    "full_description": "<p>On the night the cinema closes, <em>one reel</em> is missing.</p>",
    "release_year": 2024,
    "is_featured": True,
    "thumbnail_url": "https://img.test/thumb.jpg",
    "trailer_url": "https://vimeo.com/123456",
    "pitch_deck_url": "https://docs.test/deck.pdf",
    "gallery_images": [f"https://img.test/still-{n}.jpg" for n in range(1, 5)],
    "festival_awards": "<ul><li>Best Short, Chennai</li></ul>",
    "credits": {
        "writer": "Bala",
        "director": "Bala",
        "dop_colourist": "Ravi K",
        "music_composer": "Anu",
        "catering": "Amma's Kitchen",
    },
    "reviews": [
        {
            "review_title": "A quiet triumph",
            "reviewer_name": "S. Iyer",
            "publication": "Film Companion",
            "review_text": "<p>Tender and precise.</p>",
            "review_link": "https://reviews.test/1",
        },
        {"review_text": "<p>Unmissable.</p>", "publication": "The Hindu"},
    ],
    "articles": [
        {"article_title": "Interview with Bala", "source": "Variety", "date": "2024-05-02", "article_link": "https://press.test/a"},
        {"article_title": "Festival preview", "source": "Deadline"},
        {"article_title": "Shooting on film", "date": "2024-07-10"},
    ],
}


async def test_admin_write_then_public_read(admin_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=admin_app), base_url="http://test") as client:
        created = await client.post("/api/admin/films", json=FULL_FILM)
        assert created.status_code == 201
        record = created.json()

        page_response = await client.get(f"/api/films/{record['slug']}")
        admin_response = await client.get(f"/api/admin/films/{record['id']}")

    assert record["slug"] == "the-last-frame"
    assert page_response.status_code == 200
    page = page_response.json()
    stored = admin_response.json()

    # Stored record
    assert stored["gallery_images"] == FULL_FILM["gallery_images"]
    assert {k: v for k, v in stored["credits"].items() if v} == FULL_FILM["credits"]
    assert [r["review_text"] for r in stored["reviews"]] == ["<p>Tender and precise.</p>", "<p>Unmissable.</p>"]
    assert all(r["id"] for r in stored["reviews"])
    assert [a["article_title"] for a in stored["articles"]] == [
        "Interview with Bala",
        "Festival preview",
        "Shooting on film",
    ]

    # Public page
    assert page["title"] == "The Last Frame"
    assert page["trailer"] == {
        "kind": "vimeo",
        "src": "https://player.vimeo.com/video/123456?color=c9a84c&title=0&byline=0&portrait=0",
        "video_id": "123456",
    }
    assert page["gallery"] == FULL_FILM["gallery_images"]
    assert page["synopsis"] == FULL_FILM["full_description"]
    assert page["festival_awards"] == FULL_FILM["festival_awards"]
    assert [(row["label"], row["value"]) for row in page["credits"]] == [
        ("Writer", "Bala"),
        ("Director", "Bala"),
        ("Director of Photography & Colourist", "Ravi K"),
        ("Music Composer", "Anu"),
        ("Catering", "Amma's Kitchen"),
    ]
    assert [r["publication"] for r in page["reviews"]] == ["Film Companion", "The Hindu"]
    assert [r["id"] for r in page["reviews"]] == [r["id"] for r in stored["reviews"]]
    assert [a["article_title"] for a in page["articles"]] == [
        a["article_title"] for a in FULL_FILM["articles"]
    ]
    assert page["articles"][1]["date"] is None
    assert page["sections"] == ["synopsis", "credits", "gallery", "reviews", "press", "festival_awards"]


async def test_public_listing_reflects_featured_flag(admin_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=admin_app), base_url="http://test") as client:
        created = (await client.post("/api/admin/films", json=FULL_FILM)).json()
        featured_before = (await client.get("/api/films/featured")).json()

        await client.put(f"/api/admin/films/{created['id']}", json={**FULL_FILM, "is_featured": False})
        featured_after = (await client.get("/api/films/featured")).json()

    assert [f["slug"] for f in featured_before] == ["the-last-frame"]
    assert featured_after == []
