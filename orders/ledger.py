"""
Inventory ledger: how an order status change moves a listing's stock and
sold count. Pure; the caller persists the result and must call it once per
actual status change (re-applying the same change double-counts).
"""
from dataclasses import dataclass
from typing import Optional

from .models import Order

Status = Order.Status

COMMITTED_STATUSES = frozenset({Status.IN_PROGRESS, Status.DONE})

COMMIT = 'commit'
RELEASE = 'release'


def is_committed(status):
    return status in COMMITTED_STATUSES


def transition_kind(prev_status, next_status):
    """COMMIT, RELEASE or None when stock is untouched"""
    if is_committed(next_status) and not is_committed(prev_status):
        return COMMIT
    if next_status == Status.CANCELLED and is_committed(prev_status):
        return RELEASE
    return None


@dataclass(frozen=True)
class InventoryChange:
    stock: int
    sold_count: int
    is_active: bool
    kind: Optional[str] = None

    @property
    def changed(self):
        return self.kind is not None


def apply_status_transition(listing, order, prev_status, next_status):
    stock = int(listing.stock or 0)
    sold = int(listing.sold_count or 0)
    qty = int(order.quantity or 0)

    kind = transition_kind(prev_status, next_status)
    if kind == COMMIT:
        stock, sold = max(0, stock - qty), sold + qty
    elif kind == RELEASE:
        stock, sold = stock + qty, max(0, sold - qty)

    return InventoryChange(stock=stock, sold_count=sold, is_active=stock > 0, kind=kind)
