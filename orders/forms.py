from django import forms
from django.core.exceptions import ValidationError

from .models import Order


class OrderForm(forms.ModelForm):
    """Buyer's order for one listing; no account needed"""

    class Meta:
        model = Order
        fields = ['buyer_name', 'buyer_phone', 'buyer_comment', 'quantity']
        widgets = {
            'buyer_name': forms.TextInput(attrs={'class': 'form-input', 'placeholder': "Ваше ім'я"}),
            'buyer_phone': forms.TextInput(attrs={'class': 'form-input', 'placeholder': '+380...'}),
            'buyer_comment': forms.Textarea(attrs={'class': 'form-input', 'rows': 3}),
            'quantity': forms.NumberInput(attrs={'class': 'form-input', 'min': 1}),
        }
        error_messages = {
            'buyer_name': {'required': 'Імʼя та телефон обовʼязкові'},
            'buyer_phone': {'required': 'Імʼя та телефон обовʼязкові'},
        }

    def __init__(self, *args, flower, **kwargs):
        self.flower = flower
        super().__init__(*args, **kwargs)
        # Positive integers are validated here, not by the model field
        self.fields['quantity'] = forms.IntegerField(
            initial=1,
            widget=self.fields['quantity'].widget,
            error_messages={'required': 'Кількість має бути більше 0', 'invalid': 'Кількість має бути більше 0'},
        )

    def clean_quantity(self):
        qty = self.cleaned_data['quantity']
        if qty <= 0:
            raise ValidationError('Кількість має бути більше 0')
        if qty > self.flower.stock:
            raise ValidationError('Такої кількості немає в наявності')
        return qty

    def save_order(self, buyer_email=None):
        order = self.save(commit=False)
        order.flower = self.flower
        order.shop_id = self.flower.shop_id
        order.buyer_email = buyer_email
        order.buyer_comment = order.buyer_comment or None
        order.status = Order.Status.NEW
        order.save()
        return order
