from django.urls import path
from . import views

app_name = 'flowers'

urlpatterns = [
    # Buyer catalogs
    path('flowers/', views.catalog_page, {'catalog_key': 'flowers'}, name='flowers'),
    path('bukety/', views.catalog_page, {'catalog_key': 'bukety'}, name='bukety'),
    path('vazony/', views.catalog_page, {'catalog_key': 'vazony'}, name='vazony'),
    path('sales/', views.catalog_page, {'catalog_key': 'sales'}, name='sales'),
    path('map/', views.map_page, name='map'),
    path('map/data/', views.map_data, name='map_data'),

    # Seller listings
    path('addflower/', views.add_flower, name='add'),
    path('myflowers/', views.my_flowers, name='my_flowers'),
    path('myflowers/<int:flower_id>/update/', views.update_flower, name='update'),
    path('myflowers/<int:flower_id>/photo/', views.upload_photo, name='upload_photo'),
    path('myflowers/<int:flower_id>/delete/', views.delete_flower, name='delete'),

    # Shop QR code & poster
    path('myflowers/qr.png', views.download_qr_png, name='download_qr_png'),
    path('myflowers/poster.pdf', views.download_qr_poster, name='download_qr_poster'),
]
