from types import SimpleNamespace

import pytest

from orders.ledger import COMMIT, RELEASE, apply_status_transition, transition_kind
from orders.models import Order

Status = Order.Status


def listing(stock, sold=0):
    return SimpleNamespace(stock=stock, sold_count=sold)


def order(quantity):
    return SimpleNamespace(quantity=quantity)


def test_taking_an_order_commits_stock():
    change = apply_status_transition(listing(5), order(3), Status.NEW, Status.IN_PROGRESS)
    assert (change.stock, change.sold_count, change.is_active) == (2, 3, True)
    assert change.kind == COMMIT


def test_finishing_a_committed_order_moves_nothing():
    change = apply_status_transition(listing(2, 3), order(3), Status.IN_PROGRESS, Status.DONE)
    assert (change.stock, change.sold_count) == (2, 3)
    assert not change.changed


def test_cancelling_a_committed_order_releases_stock():
    change = apply_status_transition(listing(2, 3), order(3), Status.DONE, Status.CANCELLED)
    assert (change.stock, change.sold_count) == (5, 0)
    assert change.kind == RELEASE


def test_cancelling_a_new_order_moves_nothing():
    change = apply_status_transition(listing(5), order(3), Status.NEW, Status.CANCELLED)
    assert (change.stock, change.sold_count) == (5, 0)
    assert not change.changed


def test_last_item_sold_deactivates_listing():
    change = apply_status_transition(listing(1), order(1), Status.NEW, Status.DONE)
    assert (change.stock, change.sold_count, change.is_active) == (0, 1, False)


def test_counters_never_go_negative():
    committed = apply_status_transition(listing(1), order(3), Status.NEW, Status.IN_PROGRESS)
    assert committed.stock == 0
    released = apply_status_transition(listing(0, 1), order(3), Status.IN_PROGRESS, Status.CANCELLED)
    assert released.sold_count == 0
    assert released.stock == 3
    assert released.is_active


@pytest.mark.parametrize('target', [Status.IN_PROGRESS, Status.DONE])
@pytest.mark.parametrize('quantity', range(1, 11))
def test_commit_then_release_round_trip(target, quantity):
    taken = apply_status_transition(listing(10), order(quantity), Status.NEW, target)
    assert (taken.stock, taken.sold_count) == (10 - quantity, quantity)
    assert taken.is_active is (taken.stock > 0)

    back = apply_status_transition(
        listing(taken.stock, taken.sold_count), order(quantity), target, Status.CANCELLED,
    )
    assert (back.stock, back.sold_count, back.is_active) == (10, 0, True)


@pytest.mark.parametrize('prev, nxt, kind', [
    (Status.NEW, Status.IN_PROGRESS, COMMIT),
    (Status.NEW, Status.DONE, COMMIT),
    (Status.IN_PROGRESS, Status.DONE, None),
    (Status.IN_PROGRESS, Status.CANCELLED, RELEASE),
    (Status.DONE, Status.CANCELLED, RELEASE),
    (Status.NEW, Status.CANCELLED, None),
])
def test_transition_kind(prev, nxt, kind):
    assert transition_kind(prev, nxt) == kind
