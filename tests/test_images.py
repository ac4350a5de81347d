"""Tests for image endpoints."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.api.deps import get_image_service
from pinboard.config import settings
from pinboard.main import app
from pinboard.schemas.image import ImageRead
from pinboard.services import ImageService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

CreateImage = Callable[..., Awaitable[dict[str, Any]]]
UploadImage = Callable[..., Awaitable[Response]]
CreateCollection = Callable[..., Awaitable[dict[str, Any]]]


# ─────────────────────────────────────────────────────────────────────────────
# Upload Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_upload_image(
    client: AsyncClient, alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test uploading an image creates it with zeroed counters."""
    response = await upload_image(
        alice["headers"],
        title="Mountain lake",
        category="Nature",
        description="Early morning",
        link="https://example.com/lake",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["title"] == "Mountain lake"
    assert data["category"] == "nature"
    assert data["description"] == "Early morning"
    assert data["link"] == "https://example.com/lake"
    assert data["likes"] == 0
    assert data["saves"] == 0
    assert data["userId"] == alice["id"]
    assert data["user"]["username"] == "alice"
    assert data["collectionId"] is None
    assert data["isLiked"] is False
    assert data["isSaved"] is False
    assert data["url"].startswith("/uploads/")
    assert data["url"].endswith(".png")


@pytest.mark.asyncio
async def test_uploaded_file_is_served(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test the stored file is reachable at the image URL."""
    image = await create_image(alice["headers"], content=b"\x89PNG-served-bytes")

    response = await client.get(image["url"])

    assert response.status_code == 200
    assert response.content == b"\x89PNG-served-bytes"


@pytest.mark.asyncio
async def test_upload_accepts_file_field(
    alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test the file may also be sent as `file`."""
    response = await upload_image(
        alice["headers"],
        field="file",
        filename="pin.webp",
        content_type="image/webp",
    )

    assert response.status_code == 201
    assert response.json()["data"]["url"].endswith(".webp")


@pytest.mark.asyncio
async def test_upload_requires_file(client: AsyncClient, alice: dict[str, Any]) -> None:
    """Test uploading without a file fails."""
    response = await client.post(
        "/api/images",
        data={"title": "No file", "category": "art"},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_UPLOAD"


@pytest.mark.asyncio
async def test_upload_rejects_non_image(
    alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test only image types are accepted."""
    response = await upload_image(
        alice["headers"],
        filename="notes.txt",
        content_type="text/plain",
        content=b"hello",
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_UPLOAD"


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(
    alice: dict[str, Any],
    upload_image: UploadImage,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test files over the size limit are rejected."""
    monkeypatch.setattr(settings, "max_upload_bytes", 16)

    response = await upload_image(alice["headers"], content=b"\x89PNG" + b"\x00" * 64)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_UPLOAD"


@pytest.mark.asyncio
async def test_upload_requires_title(
    client: AsyncClient, alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test the title field is required."""
    response = await upload_image(alice["headers"], title="")

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any(e["field"] == "title" for e in body["errors"])


@pytest.mark.asyncio
async def test_upload_rejects_title_over_100_chars(
    alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test titles are limited to 100 characters."""
    response = await upload_image(alice["headers"], title="x" * 101)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_rejects_unknown_category(
    alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test the category must be a known one."""
    response = await upload_image(alice["headers"], category="cars")

    assert response.status_code == 400
    assert any(e["field"] == "category" for e in response.json()["errors"])


@pytest.mark.asyncio
async def test_upload_rejects_invalid_link(
    alice: dict[str, Any], upload_image: UploadImage
) -> None:
    """Test the link must be a URL."""
    response = await upload_image(alice["headers"], link="not a url")

    assert response.status_code == 400
    assert any(e["field"] == "link" for e in response.json()["errors"])


@pytest.mark.asyncio
async def test_upload_requires_auth(upload_image: UploadImage) -> None:
    """Test uploading requires a token."""
    response = await upload_image({})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upload_into_own_collection(
    alice: dict[str, Any],
    upload_image: UploadImage,
    create_collection: CreateCollection,
) -> None:
    """Test an image can be filed into the uploader's collection."""
    collection = await create_collection(alice["headers"])

    response = await upload_image(alice["headers"], collectionId=collection["id"])

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["collectionId"] == collection["id"]
    assert data["isSaved"] is True


@pytest.mark.asyncio
async def test_upload_into_foreign_collection(
    client: AsyncClient,
    alice: dict[str, Any],
    bob: dict[str, Any],
    upload_image: UploadImage,
    create_collection: CreateCollection,
) -> None:
    """Test filing into someone else's collection fails and stores nothing."""
    collection = await create_collection(bob["headers"])
    stored_before = set(Path(settings.upload_dir).iterdir())

    response = await upload_image(alice["headers"], collectionId=collection["id"])

    assert response.status_code == 404
    assert response.json()["code"] == "COLLECTION_NOT_FOUND"
    assert set(Path(settings.upload_dir).iterdir()) == stored_before

    listing = await client.get("/api/images")
    assert listing.json()["data"]["total"] == 0


class FailingImageService(ImageService):
    """Image service whose database write always fails."""

    async def create_image(self, *args: Any, **kwargs: Any) -> ImageRead | None:
        raise RuntimeError("database unavailable")


@pytest.mark.asyncio
async def test_upload_removes_file_when_create_fails(
    client: AsyncClient,
    db_session: AsyncSession,
    alice: dict[str, Any],
) -> None:
    """Test a failed image insert leaves no stored file behind."""
    app.dependency_overrides[get_image_service] = lambda: FailingImageService(db_session)
    stored_before = set(Path(settings.upload_dir).iterdir())

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as failing_client:
        response = await failing_client.post(
            "/api/images",
            data={"title": "Sunset", "category": "nature"},
            files={"image": ("pin.png", PNG_BYTES, "image/png")},
            headers=alice["headers"],
        )

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert set(Path(settings.upload_dir).iterdir()) == stored_before


# ─────────────────────────────────────────────────────────────────────────────
# Listing Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_images_empty(client: AsyncClient) -> None:
    """Test listing images when none exist."""
    response = await client.get("/api/images")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["total"] == 0
    assert data["page"] == 1
    assert data["pageSize"] == 20
    assert data["hasMore"] is False


@pytest.mark.asyncio
async def test_list_images_newest_first_with_pages(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test paging through images newest first."""
    first = await create_image(alice["headers"], title="First")
    second = await create_image(alice["headers"], title="Second")
    third = await create_image(alice["headers"], title="Third")

    page_one = (await client.get("/api/images?page=1&pageSize=2")).json()["data"]
    assert [i["id"] for i in page_one["items"]] == [third["id"], second["id"]]
    assert page_one["total"] == 3
    assert page_one["hasMore"] is True

    page_two = (await client.get("/api/images?page=2&pageSize=2")).json()["data"]
    assert [i["id"] for i in page_two["items"]] == [first["id"]]
    assert page_two["hasMore"] is False


@pytest.mark.asyncio
async def test_list_images_legacy_limit(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test `limit` is accepted in place of `pageSize`."""
    for title in ("One", "Two"):
        await create_image(alice["headers"], title=title)

    data = (await client.get("/api/images?limit=1")).json()["data"]

    assert len(data["items"]) == 1
    assert data["pageSize"] == 1
    assert data["hasMore"] is True


@pytest.mark.asyncio
async def test_list_images_filters(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test category and search filters."""
    await create_image(alice["headers"], title="Pasta night", category="recipes")
    await create_image(
        alice["headers"],
        title="Beach",
        category="travel",
        description="Pasta on the sand",
    )
    await create_image(alice["headers"], title="Sofa", category="interior")

    by_category = (await client.get("/api/images?category=Recipes")).json()["data"]
    assert [i["title"] for i in by_category["items"]] == ["Pasta night"]

    by_search = (await client.get("/api/images?search=Pasta")).json()["data"]
    assert {i["title"] for i in by_search["items"]} == {"Pasta night", "Beach"}
    assert by_search["total"] == 2


@pytest.mark.asyncio
async def test_list_images_category_and_search_combined(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test category and search must both match, on title or description."""
    await create_image(alice["headers"], title="Paris at night", category="travel")
    await create_image(alice["headers"], title="Paris fashion", category="fashion")
    await create_image(
        alice["headers"],
        title="Rome",
        category="travel",
        description="Day trip from Paris",
    )

    response = await client.get("/api/images?category=travel&search=Paris")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [i["title"] for i in data["items"]] == ["Rome", "Paris at night"]
    assert data["total"] == 2


@pytest.mark.asyncio
async def test_list_images_search_wildcards_match_literally(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test % and _ in a search are plain characters."""
    await create_image(alice["headers"], title="100% cotton", category="fashion")
    await create_image(alice["headers"], title="Sunset")

    percent = (await client.get("/api/images", params={"search": "%"})).json()["data"]
    assert [i["title"] for i in percent["items"]] == ["100% cotton"]

    underscore = (await client.get("/api/images", params={"search": "_"})).json()["data"]
    assert underscore["items"] == []
    assert underscore["total"] == 0


@pytest.mark.asyncio
async def test_list_user_images(
    client: AsyncClient,
    alice: dict[str, Any],
    bob: dict[str, Any],
    create_image: CreateImage,
) -> None:
    """Test listing one user's uploads."""
    await create_image(alice["headers"], title="Alice's")
    await create_image(bob["headers"], title="Bob's")

    response = await client.get(f"/api/images/user/{bob['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [i["title"] for i in data["items"]] == ["Bob's"]
    assert data["total"] == 1


@pytest.mark.asyncio
async def test_get_image(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test getting a single image."""
    image = await create_image(alice["headers"], title="Single")

    response = await client.get(f"/api/images/{image['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Single"


@pytest.mark.asyncio
async def test_get_image_not_found(client: AsyncClient) -> None:
    """Test getting a missing image returns the error envelope."""
    response = await client.get("/api/images/999")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "IMAGE_NOT_FOUND"
    assert body["requestId"] == response.headers["X-Request-ID"]


# ─────────────────────────────────────────────────────────────────────────────
# Update / Delete Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_image(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test the owner can update an image; only sent fields change."""
    image = await create_image(
        alice["headers"],
        title="Before",
        description="Old description",
        link="https://example.com/a",
    )

    response = await client.put(
        f"/api/images/{image['id']}",
        json={"title": "After", "description": None, "category": "ART"},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "After"
    assert data["description"] is None
    assert data["category"] == "art"
    assert data["link"] == "https://example.com/a"


@pytest.mark.asyncio
async def test_update_image_ignores_null_title(
    client: AsyncClient, alice: dict[str, Any], create_image: CreateImage
) -> None:
    """Test the title cannot be cleared."""
    image = await create_image(alice["headers"], title="Keep me")

    response = await client.put(
        f"/api/images/{image['id']}",
        json={"title": None},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Keep me"


@pytest.mark.asyncio
async def test_update_image_not_owner(
    client: AsyncClient,
    alice: dict[str, Any],
    bob: dict[str, Any],
    create_image: CreateImage,
) -> None:
    """Test another user cannot update the image."""
    image = await create_image(alice["headers"], title="Mine")

    response = await client.put(
        f"/api/images/{image['id']}",
        json={"title": "Stolen"},
        headers=bob["headers"],
    )

    assert response.status_code == 404
    current = (await client.get(f"/api/images/{image['id']}")).json()["data"]
    assert current["title"] == "Mine"


@pytest.mark.asyncio
async def test_delete_image(
    client: AsyncClient,
    alice: dict[str, Any],
    bob: dict[str, Any],
    create_image: CreateImage,
) -> None:
    """Test only the owner can delete an image."""
    image = await create_image(alice["headers"])

    forbidden = await client.delete(f"/api/images/{image['id']}", headers=bob["headers"])
    assert forbidden.status_code == 404

    response = await client.delete(f"/api/images/{image['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["success"] is True

    get_response = await client.get(f"/api/images/{image['id']}")
    assert get_response.status_code == 404
