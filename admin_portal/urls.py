from django.urls import path
from . import views

app_name = 'admin_portal'

urlpatterns = [
    path('', views.pending_shops, name='pending_shops'),
    path('shops/<int:profile_id>/', views.moderate_shop, name='moderate_shop'),
]
