import pytest

from app.utils.validators import validate_phone_number

BASE = "/api/v1/contacts"


@pytest.mark.parametrize("phone", ["0912345678", "+84912345678", "091 234 5678", "02812345678"])
def test_valid_vietnamese_numbers(phone):
    assert validate_phone_number(phone) == phone.replace(" ", "")


@pytest.mark.parametrize("phone", ["0012345678", "12345", "+8491234567890", "+1 555 123 4567"])
def test_invalid_numbers(phone):
    with pytest.raises(ValueError):
        validate_phone_number(phone)


async def test_submit_is_public_and_normalizes_email(client):
    response = await client.post(
        f"{BASE}/",
        json={"name": " Nguyen Van A ", "phone": "0912 345 678", "email": "Customer@Example.COM",
              "message": "I would like a quote"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Nguyen Van A"
    assert data["phone"] == "0912345678"
    assert data["email"] == "customer@example.com"


async def test_submit_with_bad_phone_is_rejected(client):
    response = await client.post(
        f"{BASE}/", json={"name": "A", "phone": "555-1234", "email": "a@example.com"}
    )
    assert response.status_code == 422


async def test_reading_requires_authentication(client):
    assert (await client.get(f"{BASE}/")).status_code == 401
    assert (await client.get(f"{BASE}/stats")).status_code == 401


async def test_list_get_delete(client, auth_headers):
    for name in ("Alice", "Bob"):
        await client.post(
            f"{BASE}/", json={"name": name, "phone": "0912345678", "email": f"{name.lower()}@example.com"}
        )

    listing = (await client.get(f"{BASE}/", headers=auth_headers)).json()
    searched = (await client.get(f"{BASE}/", params={"search": "bob"}, headers=auth_headers)).json()
    stats = (await client.get(f"{BASE}/stats", headers=auth_headers)).json()

    assert listing["total"] == 2
    assert [c["name"] for c in searched["items"]] == ["Bob"]
    assert stats == {"total_contacts": 2, "contacts_last_7_days": 2}

    contact_id = searched["items"][0]["id"]
    assert (await client.get(f"{BASE}/{contact_id}", headers=auth_headers)).json()["email"] == "bob@example.com"
    assert (await client.delete(f"{BASE}/{contact_id}", headers=auth_headers)).status_code == 200
    assert (await client.get(f"{BASE}/{contact_id}", headers=auth_headers)).status_code == 404
