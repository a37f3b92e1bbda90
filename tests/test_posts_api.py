import uuid

import pytest

BASE = "/api/v1/posts"


@pytest.fixture
async def category(client, auth_headers):
    response = await client.post("/api/v1/categories/", json={"name": "Pet Care"}, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_post(client, headers, **payload):
    payload.setdefault("content_en", "<p>Body</p>")
    response = await client.post(f"{BASE}/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_post_with_defaults(client, auth_headers, category):
    body = await create_post(
        client, auth_headers,
        title_en="Caring for Puppies", excerpt="Short intro", categories=[category["id"]],
    )

    assert body["permalink"] == "caring-for-puppies"
    assert body["status"] == "draft"
    assert body["seoTitle"] == "Caring for Puppies"
    assert body["metaDescription"] == "Short intro"
    assert body["author"]["email"] == "editor@vinpet.vn"
    assert [c["slug"] for c in body["categories"]] == ["pet-care"]


async def test_permalinks_are_unique(client, auth_headers):
    first = await create_post(client, auth_headers, title_vi="Chó con")
    second = await create_post(client, auth_headers, title_vi="Chó con")

    assert first["permalink"] == "cho-con"
    assert second["permalink"] == "cho-con-1"


async def test_create_requires_title_and_content(client, auth_headers):
    no_title = await client.post(f"{BASE}/", json={"content_en": "x"}, headers=auth_headers)
    no_content = await client.post(f"{BASE}/", json={"title_en": "x"}, headers=auth_headers)

    assert no_title.status_code == 422
    assert no_title.json()["error_code"] == "TITLE_REQUIRED"
    assert no_content.status_code == 422
    assert no_content.json()["error_code"] == "CONTENT_REQUIRED"


async def test_create_with_unknown_category_is_rejected(client, auth_headers):
    response = await client.post(
        f"{BASE}/",
        json={"title_en": "T", "content_en": "C", "categories": [str(uuid.uuid4())]},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"


async def test_create_requires_authentication(client):
    response = await client.post(f"{BASE}/", json={"title_en": "T", "content_en": "C"})
    assert response.status_code == 401


async def test_category_with_post_cannot_be_deleted(client, auth_headers, category):
    await create_post(client, auth_headers, title_en="Filed", categories=[category["id"]])

    response = await client.delete(f"/api/v1/categories/{category['id']}", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error_code"] == "CATEGORY_HAS_POSTS"
    stats = (await client.get("/api/v1/categories/stats")).json()
    assert stats["categories_with_posts"] == 1


async def test_list_filters_by_category_slug_and_status(client, auth_headers, category):
    await create_post(client, auth_headers, title_en="Filed", categories=[category["id"]], status="published")
    await create_post(client, auth_headers, title_en="Loose")

    by_slug = (await client.get(f"{BASE}/", params={"category": "pet-care"})).json()
    by_id = (await client.get(f"{BASE}/", params={"category": category["id"]})).json()
    unknown = (await client.get(f"{BASE}/", params={"category": "missing"})).json()
    published = (await client.get(f"{BASE}/", params={"status": "published"})).json()
    searched = (await client.get(f"{BASE}/", params={"search": "loose"})).json()

    assert [p["title_en"] for p in by_slug["items"]] == ["Filed"]
    assert by_id["total"] == 1
    assert unknown == {"items": [], "total": 0, "page": 1, "size": 10, "pages": 0}
    assert [p["title_en"] for p in published["items"]] == ["Filed"]
    assert [p["title_en"] for p in searched["items"]] == ["Loose"]


async def test_update_and_delete(client, auth_headers):
    post = await create_post(client, auth_headers, title_en="Draft")

    updated = await client.put(
        f"{BASE}/{post['id']}",
        json={"title_ko": "Korean", "status": "published", "tags": ["dogs"]},
        headers=auth_headers,
    )

    assert updated.status_code == 200
    assert updated.json()["title_ko"] == "Korean"
    assert updated.json()["status"] == "published"
    assert updated.json()["tags"] == ["dogs"]
    assert updated.json()["permalink"] == "draft"

    assert (await client.delete(f"{BASE}/{post['id']}", headers=auth_headers)).status_code == 200
    assert (await client.get(f"{BASE}/{post['id']}")).status_code == 404


async def test_duplicate_creates_draft_copy(client, auth_headers, category):
    post = await create_post(
        client, auth_headers,
        title_en="Original", status="published", publishDate="2024-05-01T10:00:00Z",
        categories=[category["id"]],
    )

    response = await client.post(f"{BASE}/{post['id']}/duplicate", headers=auth_headers)

    assert response.status_code == 201
    copy = response.json()
    assert copy["id"] != post["id"]
    assert copy["title_en"] == "Original (Copy)"
    assert copy["permalink"] == "original-copy"
    assert copy["status"] == "draft"
    assert copy["publishDate"] is None
    assert [c["id"] for c in copy["categories"]] == [category["id"]]


async def test_duplicate_with_custom_title(client, auth_headers):
    post = await create_post(client, auth_headers, title_en="Original")

    response = await client.post(
        f"{BASE}/{post['id']}/duplicate", json={"title": "Second Take"}, headers=auth_headers
    )

    assert response.json()["title_en"] == "Second Take"
    assert response.json()["permalink"] == "second-take"


async def test_blog_lists_published_posts_with_descriptions(client, auth_headers):
    long_text = "word " * 60
    await create_post(
        client, auth_headers,
        title_en="Older", content_en=f"<p>{long_text}</p>", content_vi="<b>Xin chao</b>",
        status="published", publishDate="2024-01-01T00:00:00Z",
    )
    await create_post(
        client, auth_headers,
        title_en="Newer", content_en="<h1>Hello</h1> <p>world</p>",
        status="published", publishDate="2024-06-01T00:00:00Z",
    )
    await create_post(client, auth_headers, title_en="Hidden draft")

    blog = (await client.get(f"{BASE}/blog")).json()

    assert [item["title_en"] for item in blog["items"]] == ["Newer", "Older"]
    newer, older = blog["items"]
    assert newer["description_en"] == "Hello world"
    assert older["description_vi"] == "Xin chao"
    assert older["description_en"].endswith("...")
    assert len(older["description_en"]) == 203


async def test_blog_english_description_falls_back_to_excerpt(client, auth_headers):
    await create_post(
        client, auth_headers,
        title_vi="Chi tieng Viet", content_en=None, content_vi="Noi dung",
        excerpt="English summary", status="published",
    )

    item = (await client.get(f"{BASE}/blog")).json()["items"][0]

    assert item["description_en"] == "English summary"
    assert item["description_vi"] == "Noi dung"
