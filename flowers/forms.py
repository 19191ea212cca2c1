from django import forms
from django.core.exceptions import ValidationError
from PIL import Image

from .models import Flower, compose_type
from . import rules

MAX_PHOTO_BYTES = 5 * 1024 * 1024


def validate_photo(image):
    """Size limit plus a real decode with Pillow"""
    if image.size > MAX_PHOTO_BYTES:
        raise ValidationError("Фото завелике (максимум 5 МБ).")
    try:
        img = Image.open(image)
        img.verify()
    except Exception:
        raise ValidationError("Некоректний файл зображення.")
    image.seek(0)
    return image


class FlowerForm(forms.ModelForm):
    """New listing"""

    category = forms.ChoiceField(
        choices=[('', 'Оберіть категорію')] + Flower.CATEGORY_CHOICES,
        error_messages={'required': 'Оберіть категорію (квіти, вазони, букети або композиції)'},
    )
    subtype = forms.CharField(
        required=False,
        max_length=150,
        widget=forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'піоновидна, кущова, мікс тощо'}),
    )

    class Meta:
        model = Flower
        fields = ['name', 'price', 'stock', 'photo', 'description', 'composition_flowers']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'Наприклад, троянда червона'}),
            'description': forms.Textarea(attrs={'class': 'form-input', 'rows': 3}),
            'composition_flowers': forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'піони, троянди, евкаліпт'}),
            'photo': forms.FileInput(attrs={'class': 'form-input', 'accept': 'image/*'}),
        }
        error_messages = {
            'name': {'required': 'Назва та ціна обовʼязкові'},
            'price': {'required': 'Назва та ціна обовʼязкові'},
        }

    def clean_price(self):
        price = self.cleaned_data['price']
        if price <= 0:
            raise ValidationError('Ціна має бути більше 0')
        return price

    def clean_photo(self):
        photo = self.cleaned_data.get('photo')
        if photo and hasattr(photo, 'size'):
            validate_photo(photo)
        return photo

    def clean(self):
        cleaned = super().clean()
        category = cleaned.get('category')
        if category in Flower.COMPLEX_CATEGORIES and not (cleaned.get('description') or '').strip():
            self.add_error('description', 'Для букетів, вазонів та композицій додайте, будь ласка, опис.')
        return cleaned

    def save_for_shop(self, shop, now):
        flower = self.save(commit=False)
        flower.shop = shop
        flower.type = compose_type(self.cleaned_data['category'], self.cleaned_data.get('subtype'))
        flower.city = shop.city
        flower.created_at = now
        if flower.photo:
            flower.photo_updated_at = now
        flower.save()
        return flower


class FlowerUpdateForm(forms.ModelForm):
    """Inline edit on the seller's listing page: stock, price and discount"""

    class Meta:
        model = Flower
        fields = ['price', 'stock', 'is_on_sale', 'sale_price', 'discount_label']

    def clean_price(self):
        price = self.cleaned_data['price']
        if price <= 0:
            raise ValidationError('Ціна має бути більше 0')
        return price

    def clean(self):
        cleaned = super().clean()
        is_on_sale = cleaned.get('is_on_sale', False)
        sale_price, label = rules.apply_sale_toggle(
            is_on_sale, cleaned.get('price'), cleaned.get('sale_price'), cleaned.get('discount_label'),
        )
        cleaned['sale_price'], cleaned['discount_label'] = rules.sale_fields_for_save(
            is_on_sale, sale_price, label,
        )
        return cleaned


class FlowerPhotoForm(forms.Form):
    photo = forms.ImageField()

    def clean_photo(self):
        return validate_photo(self.cleaned_data['photo'])
