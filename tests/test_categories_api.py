import uuid

BASE = "/api/v1/categories"


async def create_category(client, headers, **payload):
    response = await client.post(f"{BASE}/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_requires_authentication(client):
    response = await client.post(f"{BASE}/", json={"menuName": "About Us"})

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "UNAUTHORIZED"


async def test_create_returns_category_shape(client, auth_headers):
    body = await create_category(
        client, auth_headers,
        menuName="About Us", color="#FF5733", sortOrder=2, metaTitle="About",
    )

    assert body["name"] == "About Us"
    assert body["slug"] == "about-us"
    assert body["key"] == "about_us"
    assert body["isActive"] is True
    assert body["sortOrder"] == 2
    assert body["metaTitle"] == "About"
    assert body["parent"] is None
    assert body["children"] == []
    assert "createdAt" in body and "updatedAt" in body


async def test_create_with_bad_color_is_rejected(client, auth_headers):
    response = await client.post(f"{BASE}/", json={"name": "Red", "color": "red"}, headers=auth_headers)
    assert response.status_code == 422


async def test_create_without_name_is_rejected(client, auth_headers):
    response = await client.post(f"{BASE}/", json={"description": "nameless"}, headers=auth_headers)

    assert response.status_code == 422
    assert response.json()["error_code"] == "NAME_REQUIRED"


async def test_parent_and_children_are_linked(client, auth_headers):
    parent = await create_category(client, auth_headers, name="Parent")
    child = await create_category(client, auth_headers, name="Child", parent=parent["id"])

    fetched = (await client.get(f"{BASE}/{parent['id']}")).json()

    assert child["parent"] == parent["id"]
    assert fetched["children"] == [child["id"]]


async def test_get_by_slug_and_missing(client, auth_headers):
    created = await create_category(client, auth_headers, name="Contact Us")

    found = await client.get(f"{BASE}/slug/contact-us")
    missing = await client.get(f"{BASE}/slug/nope")
    missing_id = await client.get(f"{BASE}/{uuid.uuid4()}")

    assert found.status_code == 200
    assert found.json()["id"] == created["id"]
    assert missing.status_code == 404
    assert missing_id.status_code == 404
    assert missing_id.json()["error_code"] == "NOT_FOUND"


async def test_update_renames_and_reparents(client, auth_headers):
    p = await create_category(client, auth_headers, name="P")
    q = await create_category(client, auth_headers, name="Q")
    child = await create_category(client, auth_headers, name="Child", parent=p["id"])

    response = await client.put(
        f"{BASE}/{child['id']}",
        json={"menuName": "Moved Child", "parent": q["id"]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["slug"] == "moved-child"
    assert body["parent"] == q["id"]
    assert (await client.get(f"{BASE}/{p['id']}")).json()["children"] == []
    assert (await client.get(f"{BASE}/{q['id']}")).json()["children"] == [child["id"]]


async def test_update_cycle_is_conflict(client, auth_headers):
    a = await create_category(client, auth_headers, name="A")
    b = await create_category(client, auth_headers, name="B", parent=a["id"])

    response = await client.put(f"{BASE}/{a['id']}", json={"parent": b["id"]}, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error_code"] == "CATEGORY_CYCLE"


async def test_update_missing_is_not_found(client, auth_headers):
    response = await client.put(f"{BASE}/{uuid.uuid4()}", json={"name": "X"}, headers=auth_headers)
    assert response.status_code == 404


async def test_delete_guard_and_success(client, auth_headers):
    parent = await create_category(client, auth_headers, name="Parent")
    child = await create_category(client, auth_headers, name="Child", parent=parent["id"])

    blocked = await client.delete(f"{BASE}/{parent['id']}", headers=auth_headers)
    assert blocked.status_code == 409
    assert blocked.json()["error_code"] == "CATEGORY_HAS_CHILDREN"

    assert (await client.delete(f"{BASE}/{child['id']}", headers=auth_headers)).status_code == 200
    assert (await client.delete(f"{BASE}/{parent['id']}", headers=auth_headers)).status_code == 200
    assert (await client.delete(f"{BASE}/{parent['id']}", headers=auth_headers)).status_code == 404


async def test_tree_is_nested_and_ordered(client, auth_headers):
    root = await create_category(client, auth_headers, name="Root")
    await create_category(client, auth_headers, name="Zeta", parent=root["id"])
    await create_category(client, auth_headers, name="Alpha", parent=root["id"])
    await create_category(client, auth_headers, name="First", parent=root["id"], sortOrder=-1)
    hidden = await create_category(client, auth_headers, name="Hidden", status="inactive")

    tree = (await client.get(f"{BASE}/tree")).json()
    full = (await client.get(f"{BASE}/tree", params={"include_inactive": "true"})).json()

    assert [n["name"] for n in tree] == ["Root"]
    assert [n["name"] for n in tree[0]["children"]] == ["First", "Alpha", "Zeta"]
    assert hidden["id"] in [n["id"] for n in full]


async def test_list_with_filters(client, auth_headers):
    root = await create_category(client, auth_headers, name="Root")
    await create_category(client, auth_headers, name="Child", parent=root["id"])
    await create_category(client, auth_headers, name="Off", status="inactive")

    roots = (await client.get(f"{BASE}/", params={"parent": ""})).json()
    inactive = (await client.get(f"{BASE}/", params={"status": "inactive"})).json()
    by_name = (await client.get(f"{BASE}/", params={"sort_by": "name", "sort_order": "desc"})).json()

    assert roots["total"] == 2
    assert [c["name"] for c in inactive["items"]] == ["Off"]
    assert [c["name"] for c in by_name["items"]] == ["Root", "Off", "Child"]
    assert by_name["page"] == 1 and by_name["pages"] == 1


async def test_stats(client, auth_headers):
    await create_category(client, auth_headers, name="One")
    await create_category(client, auth_headers, name="Two", isActive=False)

    stats = (await client.get(f"{BASE}/stats")).json()

    assert stats["total_categories"] == 2
    assert stats["inactive_categories"] == 1
