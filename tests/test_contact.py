import pytest
from sqlalchemy import func, select

from app.core.dto.contact import ContactSubmissionModel
from app.core.repositories.quote_repository import QuoteRepository
from app.core.services import contact_service as contact_service_module
from app.infrastructure.database.models import Contact, QuoteRequest
from app.infrastructure.errors.base import ConflictError, ValidationFailed
from app.utils.enums import ContactStatusEnum, QuoteStatusEnum


SUBMIT_URL = "/api/v1/contact/submit"
CONTACTS_URL = "/api/v1/contact"


def submission(**overrides) -> dict:
    payload = {
        "firstName": "Maryam",
        "lastName": "Tehrani",
        "email": "Maryam.Tehrani@Example.com",
        "phone": "+98 21 1234 5678",
        "company": "Caspian Foods",
        "subject": "Membrane pricing",
        "message": "Please send your price list for RO membranes.",
        "gdprConsent": True,
    }
    payload.update(overrides)
    return payload


def quote_block(**overrides) -> dict:
    block = {
        "industry": "Food & Beverage",
        "applicationArea": "food_beverage",
        "requiredCapacity": "25 m3/h",
        "budget": "15000",
        "timeline": "3 months",
    }
    block.update(overrides)
    return block


async def count_rows(db_connection, model) -> int:
    session = await db_connection.get_session()
    try:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()
    finally:
        await session.close()


async def test_submit_contact_form(client, db_connection):
    response = await client.post(SUBMIT_URL, json=submission())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["quoteId"] is None
    assert await count_rows(db_connection, Contact) == 1
    assert await count_rows(db_connection, QuoteRequest) == 0


async def test_submit_with_quote_creates_pending_quote(client, db_connection, editor_headers):
    response = await client.post(
        SUBMIT_URL,
        json=submission(subject=None, message=None, quote=quote_block()),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["quoteNumber"].startswith("Q-")

    quote = await client.get(f"/api/v1/quotes/{data['quoteId']}", headers=editor_headers)
    quote_data = quote.json()["data"]
    assert quote_data["status"] == "pending"
    assert quote_data["quoteNumber"] == data["quoteNumber"]
    assert quote_data["contact"]["email"] == "maryam.tehrani@example.com"

    contact = await client.get(f"{CONTACTS_URL}/{data['contactId']}", headers=editor_headers)
    contact_data = contact.json()["data"]
    assert contact_data["subject"] == "Quote Request"
    assert contact_data["message"] == "Quote request for: 25 m3/h"
    assert contact_data["source"] == "quote_form"
    assert [q["quoteNumber"] for q in contact_data["quotes"]] == [data["quoteNumber"]]


@pytest.mark.parametrize("consent", [False, None])
async def test_submission_without_consent_creates_nothing(client, db_connection, consent):
    payload = submission(quote=quote_block())
    if consent is None:
        payload.pop("gdprConsent")
    else:
        payload["gdprConsent"] = consent

    response = await client.post(SUBMIT_URL, json=payload)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert await count_rows(db_connection, Contact) == 0
    assert await count_rows(db_connection, QuoteRequest) == 0


async def test_plain_contact_requires_subject_and_message(client, db_connection):
    response = await client.post(SUBMIT_URL, json=submission(subject=None))

    assert response.status_code == 422
    assert response.json()["error"]["details"] == {"missing": ["subject"]}
    assert await count_rows(db_connection, Contact) == 0


@pytest.mark.parametrize("overrides", [
    {"email": "not-an-email"},
    {"firstName": "M"},
    {"quote": {"applicationArea": "space_station", "requiredCapacity": "1"}},
])
async def test_malformed_submission(client, overrides):
    response = await client.post(SUBMIT_URL, json=submission(**overrides))

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_same_email_creates_a_new_contact_each_time(client, db_connection):
    await client.post(SUBMIT_URL, json=submission())
    await client.post(SUBMIT_URL, json=submission())

    assert await count_rows(db_connection, Contact) == 2


async def test_quote_number_collision_is_retried(contact_service, create_quote, monkeypatch, db_connection):
    existing = await create_quote(quote_number="Q-1-001")
    numbers = iter(["Q-1-001", "Q-1-002"])

    async def never_exists(self, quote_number):
        return False

    # Skip the pre-check so the unique constraint itself has to catch the duplicate
    monkeypatch.setattr(QuoteRepository, "quote_number_exists", never_exists)
    monkeypatch.setattr(contact_service_module, "generate_quote_number", lambda: next(numbers))

    data = ContactSubmissionModel.model_validate(submission(quote=quote_block()))
    result = (await contact_service.submit(data)).unwrap()

    assert result.quote_number == "Q-1-002"
    assert result.quote_number != existing.quote_number
    assert await count_rows(db_connection, QuoteRequest) == 2


async def test_exhausted_quote_numbers_raise_conflict(contact_service, create_quote, monkeypatch, db_connection):
    await create_quote(quote_number="Q-1-001")
    monkeypatch.setattr(contact_service_module, "generate_quote_number", lambda: "Q-1-001")

    data = ContactSubmissionModel.model_validate(submission(quote=quote_block()))
    with pytest.raises(ConflictError):
        await contact_service.submit(data)

    assert await count_rows(db_connection, QuoteRequest) == 1
    assert await count_rows(db_connection, Contact) == 1


async def test_submit_rejects_missing_consent_at_service_level(contact_service):
    data = ContactSubmissionModel.model_validate(submission(gdprConsent=False))

    result = await contact_service.submit(data)

    assert isinstance(result.error, ValidationFailed)


async def test_list_search_and_status(client, editor_headers):
    await client.post(SUBMIT_URL, json=submission(company="Zagros Mining"))
    await client.post(SUBMIT_URL, json=submission(company="Other", email="other@example.com"))

    response = await client.get(CONTACTS_URL, params={"search": "zagros"}, headers=editor_headers)
    data = response.json()["data"]
    assert [c["company"] for c in data] == ["Zagros Mining"]

    invalid = await client.get(CONTACTS_URL, params={"status": "pending"}, headers=editor_headers)
    assert invalid.status_code == 422


async def test_update_status_and_stats(client, editor_headers):
    created = await client.post(SUBMIT_URL, json=submission())
    contact_id = created.json()["data"]["contactId"]

    updated = await client.put(
        f"{CONTACTS_URL}/{contact_id}/status",
        json={"status": "resolved"},
        headers=editor_headers,
    )
    assert updated.json()["data"]["status"] == ContactStatusEnum.RESOLVED.value

    stats = await client.get(f"{CONTACTS_URL}/stats", headers=editor_headers)
    assert stats.json()["data"] == {
        "total": 1,
        "new": 0,
        "inProgress": 0,
        "resolved": 1,
        "closed": 0,
    }


async def test_delete_contact_cascades_to_quotes(client, db_connection, editor_headers, admin_headers):
    created = await client.post(SUBMIT_URL, json=submission(quote=quote_block()))
    contact_id = created.json()["data"]["contactId"]

    forbidden = await client.delete(f"{CONTACTS_URL}/{contact_id}", headers=editor_headers)
    assert forbidden.status_code == 403

    deleted = await client.delete(f"{CONTACTS_URL}/{contact_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json()["data"]["total"] == 0
    assert await count_rows(db_connection, QuoteRequest) == 0


async def test_contacts_require_staff(client):
    response = await client.get(CONTACTS_URL)

    assert response.status_code == 401


async def test_export_contacts(client, editor_headers):
    await client.post(SUBMIT_URL, json=submission())

    response = await client.get(f"{CONTACTS_URL}/export", headers=editor_headers)

    assert response.status_code == 200
    lines = response.text.strip().splitlines()
    assert lines[0] == "Name,Email,Phone,Company,Subject,Status,Created At"
    assert lines[1].startswith("Maryam Tehrani,maryam.tehrani@example.com,")


async def test_submit_returns_the_stored_quote(contact_service, quote_service):
    data = ContactSubmissionModel.model_validate(submission(quote=quote_block(requiredCapacity="40 m3/h")))

    result = (await contact_service.submit(data)).unwrap()

    stored = (await quote_service.get(result.quote_id)).unwrap()
    assert stored.quote_number == result.quote_number
    assert stored.contact_id == result.contact_id
    assert stored.status == QuoteStatusEnum.PENDING
    assert stored.required_capacity == "40 m3/h"
