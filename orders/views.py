import logging

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from core.access import Scope
from core.decorators import role_required
from flowers.models import Flower
from flowers import rules
from .forms import OrderForm
from .models import AuditLog, Order
from .services import change_order_status, seller_orders
from .transitions import InvalidStatusTransition, next_statuses

logger = logging.getLogger(__name__)

ORDER_TABS = ('active', 'done')


def _order_tab(value):
    return value if value in ORDER_TABS else 'active'


def place_order(request, flower_id):
    """Buyer order form for one listing"""
    flower = get_object_or_404(Flower.objects.select_related('shop'), id=flower_id)

    if request.method == 'POST':
        form = OrderForm(request.POST, flower=flower)
        if form.is_valid():
            buyer_email = request.user.email if request.user.is_authenticated and request.user.email else None
            try:
                order = form.save_order(buyer_email=buyer_email)
            except DatabaseError:
                logger.exception('Order for listing %s failed', flower.pk)
                messages.error(request, 'Не вдалося оформити замовлення')
            else:
                # Stock moves only when the seller changes the status
                logger.info('Order %s placed for listing %s x%s', order.pk, flower.pk, order.quantity)
                messages.success(request, 'Замовлення успішно оформлено! 🌸 Ми скоро з вами звʼяжемось.')
                return redirect('orders:place', flower_id=flower.id)
    else:
        form = OrderForm(flower=flower)

    return render(request, 'orders/order_form.html', {
        'flower': flower,
        'price': rules.resolve_price(flower),
        'form': form,
        'out_of_stock': flower.stock <= 0,
    })


@role_required(Scope.SELLER)
def my_orders(request):
    """Seller's orders: active (new, in progress) or done (done, cancelled)"""
    tab = _order_tab(request.GET.get('tab'))

    try:
        orders = list(seller_orders(request.profile, tab))
    except DatabaseError:
        logger.exception('Loading orders for shop %s failed', request.profile.pk)
        messages.error(request, 'Не вдалося завантажити замовлення')
        orders = []

    rows = [{'order': o, 'choices': next_statuses(o.status)} for o in orders]
    return render(request, 'orders/my_orders.html', {
        'profile': request.profile,
        'rows': rows,
        'tab': tab,
    })


@require_POST
@role_required(Scope.SELLER)
def update_status(request, order_id):
    order = get_object_or_404(Order, id=order_id, shop=request.profile)
    next_status = request.POST.get('status', '')
    tab = _order_tab(request.POST.get('tab'))

    try:
        result = change_order_status(order, next_status)
    except InvalidStatusTransition:
        messages.error(request, 'Такий перехід статусу неможливий')
        return redirect(f"{reverse('orders:my_orders')}?tab={tab}")
    except DatabaseError:
        logger.exception('Status update for order %s failed', order.pk)
        messages.error(request, 'Не вдалося оновити статус')
        return redirect(f"{reverse('orders:my_orders')}?tab={tab}")

    if result.changed:
        AuditLog.record(
            request, 'ORDER_STATUS_CHANGED', order,
            details=f'{result.previous_status} -> {order.status}',
        )
        if result.partial:
            messages.warning(request, result.warning)
        else:
            messages.success(request, f'Замовлення #{order.id}: {order.get_status_display()}')

    return redirect(f"{reverse('orders:my_orders')}?tab={tab}")
