import itertools
from decimal import Decimal
from uuid import uuid4

import pytest

from app.core.dto.quote import QuoteUpdateModel
from app.core.services.quote_service import can_transition
from app.infrastructure.errors.base import InvalidTransition, NotFoundError, ValidationFailed
from app.utils.enums import TERMINAL_QUOTE_STATUSES, QuoteStatusEnum, UserRoleEnum
from tests.conftest import BASE_TIME, scan_status_counts


ALL_STATUSES = list(QuoteStatusEnum)
STATUS_PAIRS = list(itertools.product(ALL_STATUSES, ALL_STATUSES))


def expected_counts(stats) -> dict[QuoteStatusEnum, int]:
    return {
        QuoteStatusEnum.PENDING: stats.pending_quotes,
        QuoteStatusEnum.IN_PROGRESS: stats.in_progress_quotes,
        QuoteStatusEnum.QUOTED: stats.quoted_quotes,
        QuoteStatusEnum.APPROVED: stats.approved_quotes,
        QuoteStatusEnum.REJECTED: stats.rejected_quotes,
        QuoteStatusEnum.CANCELLED: stats.cancelled_quotes,
    }


@pytest.mark.parametrize("current, target", STATUS_PAIRS)
def test_can_transition_matches_terminality(current, target):
    assert can_transition(current, target) is (current not in TERMINAL_QUOTE_STATUSES)


@pytest.mark.parametrize("current", ALL_STATUSES)
def test_unknown_target_is_never_accepted(current):
    assert can_transition(current, "archived") is False


@pytest.mark.parametrize("current, target", STATUS_PAIRS)
async def test_update_status_transition_matrix(quote_service, create_quote, current, target):
    quote = await create_quote(status=current)

    result = await quote_service.update_status(quote.id, target.value)

    if current.is_terminal:
        assert isinstance(result.error, InvalidTransition)
        assert result.error.code == "INVALID_TRANSITION"
        assert result.error.details == {"currentStatus": current.value, "requestedStatus": target.value}
        stored = (await quote_service.get(quote.id)).unwrap()
        assert stored.status == current
        assert stored.quote_number == quote.quote_number
    else:
        assert result.is_ok
        assert result.value.quote.status == target


async def test_update_status_unknown_quote(quote_service):
    result = await quote_service.update_status(uuid4(), "in_progress")

    assert isinstance(result.error, NotFoundError)


async def test_update_status_unrecognized_value_leaves_quote_unchanged(quote_service, create_quote):
    quote = await create_quote(status=QuoteStatusEnum.IN_PROGRESS)

    result = await quote_service.update_status(quote.id, "archived")

    assert isinstance(result.error, InvalidTransition)
    assert (await quote_service.get(quote.id)).unwrap().status == QuoteStatusEnum.IN_PROGRESS


async def test_update_status_sets_notes(quote_service, create_quote):
    quote = await create_quote()

    change = (await quote_service.update_status(quote.id, "in_progress", notes="Called the customer")).unwrap()

    assert change.quote.notes == "Called the customer"


async def test_stats_are_fresh_after_every_mutation(quote_service, create_quote, create_user, db_connection):
    first = await create_quote()
    second = await create_quote(status=QuoteStatusEnum.IN_PROGRESS)
    await create_quote(status=QuoteStatusEnum.APPROVED)
    user = await create_user()

    changes = [
        (await quote_service.update_status(first.id, "quoted")).unwrap(),
        (await quote_service.assign(second.id, user.id)).unwrap(),
        (await quote_service.record_quote_amount(first.id, Decimal("1200.50"))).unwrap(),
        (await quote_service.update(second.id, QuoteUpdateModel(industry="Mining"))).unwrap(),
        (await quote_service.update_status(second.id, "cancelled")).unwrap(),
    ]
    for change in changes[:-1]:
        assert change.stats.total_quotes == 3
    last = changes[-1].stats
    assert expected_counts(last) == await scan_status_counts(db_connection)

    stats_after_delete = (await quote_service.delete(first.id)).unwrap()
    assert stats_after_delete.total_quotes == 2
    assert expected_counts(stats_after_delete) == await scan_status_counts(db_connection)


async def test_assign_and_unassign(quote_service, create_quote, create_user):
    quote = await create_quote()
    user = await create_user(first_name="Omid", last_name="Karimi")

    assigned = (await quote_service.assign(quote.id, user.id)).unwrap().quote
    assert assigned.assigned_to_id == user.id
    assert assigned.assigned_to.first_name == "Omid"
    assert assigned.status == QuoteStatusEnum.PENDING

    cleared = (await quote_service.assign(quote.id, None)).unwrap().quote
    assert cleared.assigned_to_id is None
    assert cleared.assigned_to is None


async def test_assign_rejects_unknown_user(quote_service, create_quote):
    quote = await create_quote()

    result = await quote_service.assign(quote.id, uuid4())

    assert isinstance(result.error, NotFoundError)


async def test_assign_rejects_inactive_user(quote_service, create_quote, create_user):
    quote = await create_quote()
    user = await create_user(role=UserRoleEnum.EDITOR, is_active=False)

    result = await quote_service.assign(quote.id, user.id)

    assert isinstance(result.error, ValidationFailed)


@pytest.mark.parametrize("status", sorted(TERMINAL_QUOTE_STATUSES, key=lambda s: s.value))
async def test_assign_rejects_terminal_quote(quote_service, create_quote, create_user, status):
    quote = await create_quote(status=status)
    user = await create_user()

    result = await quote_service.assign(quote.id, user.id)

    assert isinstance(result.error, InvalidTransition)


async def test_quote_amount_hidden_until_quoted(quote_service, create_quote):
    quote = await create_quote(status=QuoteStatusEnum.IN_PROGRESS)

    recorded = (await quote_service.record_quote_amount(quote.id, Decimal("990.00"))).unwrap().quote
    assert recorded.quote_amount is None

    quoted = (await quote_service.update_status(quote.id, "quoted")).unwrap().quote
    assert quoted.quote_amount == Decimal("990.00")

    approved = (await quote_service.update_status(quote.id, "approved")).unwrap().quote
    assert approved.quote_amount == Decimal("990.00")


async def test_quote_amount_must_be_positive(quote_service, create_quote):
    quote = await create_quote(status=QuoteStatusEnum.QUOTED)

    result = await quote_service.record_quote_amount(quote.id, Decimal("0"))

    assert isinstance(result.error, ValidationFailed)


async def test_update_requires_a_field(quote_service, create_quote):
    quote = await create_quote()

    result = await quote_service.update(quote.id, QuoteUpdateModel())

    assert isinstance(result.error, ValidationFailed)


async def test_update_never_touches_quote_number_or_status(quote_service, create_quote):
    quote = await create_quote(status=QuoteStatusEnum.IN_PROGRESS)
    data = QuoteUpdateModel.model_validate({
        "timeline": "Q3",
        "quoteNumber": "Q-HIJACK",
        "status": "approved",
    })

    updated = (await quote_service.update(quote.id, data)).unwrap().quote

    assert updated.timeline == "Q3"
    assert updated.quote_number == quote.quote_number
    assert updated.status == QuoteStatusEnum.IN_PROGRESS


async def test_update_allowed_on_terminal_quote(quote_service, create_quote):
    quote = await create_quote(status=QuoteStatusEnum.REJECTED)

    result = await quote_service.update(quote.id, QuoteUpdateModel(notes="Lost to competitor"))

    assert result.is_ok


async def test_delete_is_permanent(quote_service, create_quote):
    quote = await create_quote()

    assert (await quote_service.delete(quote.id)).is_ok
    assert isinstance((await quote_service.get(quote.id)).error, NotFoundError)
    assert isinstance((await quote_service.delete(quote.id)).error, NotFoundError)


async def test_inactive_assignee_leaves_quote_unchanged(quote_service, create_quote, create_user):
    quote = await create_quote()
    user = await create_user(is_active=False)

    result = await quote_service.assign(quote.id, user.id)

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details == {"assignedTo": str(user.id)}
    stored = (await quote_service.get(quote.id)).unwrap()
    assert stored.assigned_to_id is None


async def test_same_status_change_touches_updated_at(quote_service, create_quote):
    quote = await create_quote(updated_at=BASE_TIME)

    change = (await quote_service.update_status(quote.id, "pending")).unwrap()

    assert change.quote.status == QuoteStatusEnum.PENDING
    assert change.quote.updated_at.replace(tzinfo=None) > BASE_TIME.replace(tzinfo=None)


async def test_clearing_an_empty_assignment_touches_updated_at(quote_service, create_quote):
    quote = await create_quote(updated_at=BASE_TIME)

    change = (await quote_service.assign(quote.id, None)).unwrap()

    assert change.quote.assigned_to_id is None
    assert change.quote.updated_at.replace(tzinfo=None) > BASE_TIME.replace(tzinfo=None)
