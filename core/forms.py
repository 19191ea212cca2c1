from django import forms
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError

from flowers.forms import validate_photo
from .models import Role, UserProfile


class RegisterForm(forms.Form):
    """Shop (or buyer) sign-up"""

    ACCOUNT_CHOICES = [
        ('shop', 'Квітковий магазин'),
        ('buyer', 'Покупець'),
    ]

    account_type = forms.ChoiceField(choices=ACCOUNT_CHOICES, initial='shop')
    username = forms.CharField(max_length=150)
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput, min_length=6)
    shop_name = forms.CharField(max_length=200, required=False)
    city = forms.CharField(max_length=100, required=False)
    address = forms.CharField(max_length=300, required=False)
    contact = forms.CharField(max_length=100, required=False)

    def clean_username(self):
        username = self.cleaned_data['username']
        if User.objects.filter(username=username).exists():
            raise ValidationError('Такий логін вже зайнятий.')
        return username

    def clean_email(self):
        email = self.cleaned_data['email']
        if User.objects.filter(email=email).exists():
            raise ValidationError('Цей email вже зареєстровано.')
        return email

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('account_type') == 'shop':
            for field in ('shop_name', 'city', 'address', 'contact'):
                if not (cleaned.get(field) or '').strip():
                    self.add_error(field, 'Заповніть всі поля')
        return cleaned

    def save(self):
        data = self.cleaned_data
        user = User.objects.create_user(
            username=data['username'],
            email=data['email'],
            password=data['password'],
        )
        # Shops wait for an admin; buyers can use the site right away
        role = Role.PENDING if data['account_type'] == 'shop' else Role.BUYER
        return UserProfile.objects.create(
            user=user,
            role=role,
            shop_name=data.get('shop_name', ''),
            city=data.get('city', ''),
            address=data.get('address', ''),
            contact=data.get('contact', ''),
        )


class ProfileForm(forms.ModelForm):
    """Shop profile fields the owner may edit (never the role)"""

    class Meta:
        model = UserProfile
        fields = ['shop_name', 'city', 'address', 'contact', 'lat', 'lng']
        widgets = {
            'shop_name': forms.TextInput(attrs={'class': 'form-input'}),
            'city': forms.TextInput(attrs={'class': 'form-input', 'placeholder': 'Київ'}),
            'address': forms.TextInput(attrs={'class': 'form-input'}),
            'contact': forms.TextInput(attrs={'class': 'form-input', 'placeholder': '+380...'}),
        }


class AvatarForm(forms.Form):
    avatar = forms.ImageField()

    def clean_avatar(self):
        return validate_photo(self.cleaned_data['avatar'])
