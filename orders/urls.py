from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('order/<int:flower_id>/', views.place_order, name='place'),
    path('myorders/', views.my_orders, name='my_orders'),
    path('myorders/<int:order_id>/status/', views.update_status, name='update_status'),
]
