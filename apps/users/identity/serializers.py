"""Users Identity - Serializers."""
from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.common.core.validators import phone_validator
from apps.common.geography.serializers import AddressPayloadSerializer, AddressSerializer
from .models import User


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8, style={'input_type': 'password'})
    passwordConfirm = serializers.CharField(write_only=True, style={'input_type': 'password'})
    firstName = serializers.CharField(max_length=150, required=False, allow_blank=True)
    lastName = serializers.CharField(max_length=150, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=[User.Role.CLIENT, User.Role.MASTER], default=User.Role.CLIENT)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('This email is already in use')
        return value.lower()

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    def validate(self, attrs: dict) -> dict:
        if attrs['password'] != attrs['passwordConfirm']:
            raise serializers.ValidationError({'passwordConfirm': 'Passwords do not match'})
        return attrs


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class TokenRefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class OccupationRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()


class UserBriefSerializer(serializers.ModelSerializer):
    """Party of a ticket, chat or review."""
    fullName = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'fullName', 'role', 'avatar']


class UserSerializer(serializers.ModelSerializer):
    """The authenticated user's own account."""
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    fullName = serializers.CharField(source='full_name', read_only=True)
    occupations = OccupationRefSerializer(many=True, read_only=True)
    addresses = AddressSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'firstName', 'lastName', 'fullName', 'role', 'phone', 'avatar', 'about',
                  'occupations', 'addresses', 'createdAt']
        read_only_fields = fields


class PublicProfileSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    fullName = serializers.CharField()
    role = serializers.CharField()
    avatar = serializers.ImageField(allow_null=True)
    about = serializers.CharField(allow_blank=True)
    occupations = OccupationRefSerializer(many=True)
    addresses = AddressSerializer(many=True)
    reviewsCount = serializers.IntegerField()
    rating = serializers.FloatField()
    activeTickets = serializers.ListField(child=serializers.DictField())
    isFavorite = serializers.BooleanField()


class UserProfileUpdateSerializer(serializers.Serializer):
    firstName = serializers.CharField(source='first_name', max_length=150, required=False, allow_blank=True)
    lastName = serializers.CharField(source='last_name', max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=15, required=False, allow_blank=True, validators=[phone_validator])
    about = serializers.CharField(required=False, allow_blank=True)
    occupations = serializers.ListField(child=serializers.IntegerField(), required=False)
    addresses = AddressPayloadSerializer(many=True, required=False)
