"""
ORDER STATUS RULES

The only allowed order status transitions. No database writes and no stock
changes here; orders.services applies them and calls the ledger.
"""
from .models import Order

Status = Order.Status


class OrderLifecycleError(Exception):
    pass


class InvalidStatusTransition(OrderLifecycleError):
    pass


INITIAL_STATE = Status.NEW

TERMINAL_STATES = {
    Status.CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Status.NEW: {Status.IN_PROGRESS, Status.DONE, Status.CANCELLED},
    Status.IN_PROGRESS: {Status.DONE, Status.CANCELLED},
    # A finished order can still be called off; its stock is released
    Status.DONE: {Status.CANCELLED},
}


def can_transition(from_status, to_status):
    if from_status in TERMINAL_STATES:
        return False
    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def next_statuses(from_status):
    """Statuses a seller may pick for an order currently in ``from_status``"""
    return [s for s in Status if can_transition(from_status, s)]


def validate_transition(order, target_status):
    if target_status not in Status.values:
        raise InvalidStatusTransition(f"Unknown order status '{target_status}'")
    if not can_transition(order.status, target_status):
        raise InvalidStatusTransition(
            f"Order {order.id} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )
