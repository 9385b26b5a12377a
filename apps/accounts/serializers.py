from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, PROFILE_ICONS, DEFAULT_PROFILE_ICON


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'nickname',
            'profile_icon',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'nickname', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    nickname = serializers.CharField(required=True, max_length=30)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    profile_icon = serializers.ChoiceField(
        choices=PROFILE_ICONS,
        default=DEFAULT_PROFILE_ICON,
    )

    def validate_nickname(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Nickname cannot be blank')
        return value

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    nickname = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
