from types import SimpleNamespace

import pytest

from orders.models import Order
from orders.transitions import (
    InvalidStatusTransition, can_transition, next_statuses, validate_transition,
)

Status = Order.Status


@pytest.mark.parametrize('source, target, allowed', [
    (Status.NEW, Status.IN_PROGRESS, True),
    (Status.NEW, Status.DONE, True),
    (Status.NEW, Status.CANCELLED, True),
    (Status.IN_PROGRESS, Status.DONE, True),
    (Status.IN_PROGRESS, Status.CANCELLED, True),
    (Status.IN_PROGRESS, Status.NEW, False),
    (Status.DONE, Status.CANCELLED, True),
    (Status.DONE, Status.IN_PROGRESS, False),
    (Status.CANCELLED, Status.NEW, False),
    (Status.CANCELLED, Status.DONE, False),
])
def test_transition_table(source, target, allowed):
    assert can_transition(source, target) is allowed


def test_cancelled_is_terminal():
    assert next_statuses(Status.CANCELLED) == []


def test_next_statuses_for_new_order():
    assert next_statuses(Status.NEW) == [Status.IN_PROGRESS, Status.DONE, Status.CANCELLED]


def test_validate_rejects_unknown_status():
    order = SimpleNamespace(id=1, status=Status.NEW)
    with pytest.raises(InvalidStatusTransition):
        validate_transition(order, 'shipped')


def test_validate_rejects_reopening():
    order = SimpleNamespace(id=1, status='cancelled')
    with pytest.raises(InvalidStatusTransition, match="from 'cancelled'"):
        validate_transition(order, Status.NEW)
