"""
Printable A4 poster for a flower shop: name, address, QR code to the map
and the shop's current offers.
"""
from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from . import rules
from .qr_generator import get_qr_image_bytes, shop_map_url

# Built-in PDF fonts have no Cyrillic glyphs; register a TTF to change this
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def generate_shop_poster(shop, listings=(), base_url=None):
    """A4 PDF poster with the shop QR code and up to four offers"""

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    primary = HexColor("#DB2777")
    dark_text = HexColor("#1a1a2e")
    gray_text = HexColor("#6b7280")

    # Header band
    c.setFillColor(primary)
    c.rect(0, height - 3*cm, width, 3*cm, fill=True, stroke=False)

    c.setFillColor(HexColor("#FFFFFF"))
    c.setFont(FONT_BOLD, 24)
    c.drawCentredString(width/2, height - 2*cm, "KVITY")

    # Shop
    c.setFillColor(dark_text)
    c.setFont(FONT_BOLD, 32)
    c.drawCentredString(width/2, height - 5.5*cm, shop.display_name)

    c.setFillColor(gray_text)
    c.setFont(FONT, 16)
    location = ", ".join(part for part in (shop.city, shop.address) if part)
    if location:
        c.drawCentredString(width/2, height - 6.5*cm, location)

    # QR code
    qr_image = ImageReader(get_qr_image_bytes(shop, base_url))
    qr_size = 8*cm
    qr_x = (width - qr_size) / 2
    qr_y = height - 16.5*cm
    c.drawImage(qr_image, qr_x, qr_y, width=qr_size, height=qr_size)

    c.setStrokeColor(primary)
    c.setLineWidth(3)
    c.rect(qr_x - 0.3*cm, qr_y - 0.3*cm, qr_size + 0.6*cm, qr_size + 0.6*cm, fill=False, stroke=True)

    c.setFillColor(dark_text)
    c.setFont(FONT, 11)
    c.drawCentredString(width/2, qr_y - 1*cm, shop_map_url(shop, base_url))

    # Offers
    offers = list(listings)[:4]
    if offers:
        c.setFillColor(HexColor("#fdf2f8"))
        c.rect(2*cm, 3*cm, width - 4*cm, 5*cm, fill=True, stroke=False)
        c.setStrokeColor(primary)
        c.setLineWidth(1)
        c.rect(2*cm, 3*cm, width - 4*cm, 5*cm, fill=False, stroke=True)

        c.setFillColor(dark_text)
        c.setFont(FONT, 12)
        y = 7*cm
        for flower in offers:
            price = rules.resolve_price(flower)
            line = f"{flower.name}: {price.display_price} UAH"
            if price.discounted:
                line += f" (was {price.strikethrough_price})"
            c.drawString(3*cm, y, line)
            y -= 1*cm

    c.setFillColor(gray_text)
    c.setFont(FONT, 10)
    c.drawCentredString(width/2, 1.5*cm, "Powered by kvity - local flower shops near you")

    c.save()
    buffer.seek(0)

    return buffer
