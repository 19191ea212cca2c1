"""
QR codes that lead buyers to a shop on the kvity map
"""
import qrcode
from io import BytesIO
from django.conf import settings
from django.urls import reverse


def shop_map_url(shop, base_url=None):
    """Public URL of the map with the shop highlighted"""
    base_url = (base_url or settings.SITE_URL).rstrip('/')
    return f"{base_url}{reverse('flowers:map')}?highlightShopId={shop.pk}"


def get_qr_image_bytes(shop, base_url=None):
    """QR code PNG as a BytesIO, ready for a response or a PDF"""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(shop_map_url(shop, base_url))
    qr.make(fit=True)

    img = qr.make_image(fill_color="#DB2777", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    buffer.seek(0)

    return buffer
