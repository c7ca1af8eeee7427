import re
from datetime import datetime, timezone

from app.core.services.stats_service import last_months
from app.utils.enums import UserRoleEnum
from app.utils.quote_number import generate_quote_number


USERS_URL = "/api/v1/users"


async def test_list_users_filters_by_role_and_search(client, create_user, admin, admin_headers):
    await create_user(first_name="Omid", last_name="Karimi")
    await create_user(role=UserRoleEnum.ADMIN, first_name="Leila", last_name="Hosseini")

    admins = await client.get(USERS_URL, params={"status": "admin", "sortBy": "email", "sortOrder": "asc"},
                              headers=admin_headers)
    emails = [u["email"] for u in admins.json()["data"]]
    assert emails == ["admin@example.com", "staff3@example.com"]

    found = await client.get(USERS_URL, params={"search": "karimi"}, headers=admin_headers)
    data = found.json()["data"]
    assert [u["lastName"] for u in data] == ["Karimi"]
    assert data[0]["role"] == "editor"
    assert data[0]["isActive"] is True


async def test_list_users_rejects_unknown_role(client, admin_headers):
    response = await client.get(USERS_URL, params={"status": "owner"}, headers=admin_headers)

    assert response.status_code == 422


async def test_health(client):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["data"] == {"status": "ok", "database": "ok"}
    assert response.headers["x-request-id"]


def test_quote_number_format():
    assert re.fullmatch(r"Q-\d{13}-\d{3}", generate_quote_number())
    assert generate_quote_number(now_ms=1718000000000).startswith("Q-1718000000000-")


def test_last_months_crosses_year_boundary():
    months = last_months(datetime(2026, 2, 15, tzinfo=timezone.utc), 4)

    assert months == [(2025, 11), (2025, 12), (2026, 1), (2026, 2)]
