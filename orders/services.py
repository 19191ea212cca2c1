import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import DatabaseError
from django.db.models import Count, Q, Sum

from flowers.models import Flower
from .ledger import apply_status_transition, transition_kind
from .models import Order
from .transitions import validate_transition

logger = logging.getLogger(__name__)

INVENTORY_NOT_ADJUSTED = 'Статус оновлено, але не вдалося оновити склад (stock).'


@dataclass
class StatusChangeResult:
    order: Order
    previous_status: str
    changed: bool = False
    inventory_adjusted: bool = False
    warning: str = ''

    @property
    def partial(self):
        return bool(self.warning)


def change_order_status(order, next_status):
    """
    Move a seller's order to ``next_status`` and adjust the listing's stock.

    Three separate writes, no transaction: the order status is authoritative,
    so if the listing cannot be loaded or saved the new status stays and the
    result carries a warning instead. DatabaseError from the status write
    itself propagates.
    """
    prev_status = order.status
    result = StatusChangeResult(order=order, previous_status=prev_status)

    if prev_status == next_status:
        return result

    validate_transition(order, next_status)

    order.status = next_status
    order.save(update_fields=['status'])
    result.changed = True

    # Only commit and release transitions touch the listing
    if transition_kind(prev_status, next_status) is None:
        return result

    try:
        flower = Flower.objects.get(pk=order.flower_id)
    except (Flower.DoesNotExist, DatabaseError):
        logger.warning('Order %s: listing %s not loaded, stock not adjusted', order.pk, order.flower_id)
        result.warning = INVENTORY_NOT_ADJUSTED
        return result

    change = apply_status_transition(flower, order, prev_status, next_status)
    if not change.changed:
        return result

    flower.stock = change.stock
    flower.sold_count = change.sold_count
    flower.is_active = change.is_active
    try:
        flower.save(update_fields=['stock', 'sold_count', 'is_active'])
    except DatabaseError:
        logger.exception('Order %s: listing %s update failed', order.pk, flower.pk)
        result.warning = INVENTORY_NOT_ADJUSTED
        return result

    logger.info(
        'Order %s %s -> %s: listing %s stock=%s sold=%s (%s)',
        order.pk, prev_status, next_status, flower.pk, change.stock, change.sold_count, change.kind,
    )
    result.inventory_adjusted = True
    return result


def seller_orders(shop, tab='active'):
    statuses = Order.CLOSED_STATUSES if tab == 'done' else Order.ACTIVE_STATUSES
    return (
        Order.objects.filter(shop=shop, status__in=statuses)
        .select_related('flower')
        .order_by('-created_at', '-pk')
    )


def shop_stats(shop):
    """Order counts plus items and revenue of done orders"""
    orders = Order.objects.filter(shop=shop)
    counts = orders.aggregate(
        done=Count('id', filter=Q(status=Order.Status.DONE)),
        in_progress=Count('id', filter=Q(status=Order.Status.IN_PROGRESS)),
        cancelled=Count('id', filter=Q(status=Order.Status.CANCELLED)),
        items_done=Sum('quantity', filter=Q(status=Order.Status.DONE)),
    )

    revenue = Decimal('0')
    for order in orders.filter(status=Order.Status.DONE).select_related('flower'):
        if order.flower is not None:
            revenue += order.flower.price * order.quantity

    return {
        'done_orders': counts['done'],
        'in_progress_orders': counts['in_progress'],
        'cancelled_orders': counts['cancelled'],
        'items_done': counts['items_done'] or 0,
        'revenue_done': revenue,
    }
