from rest_framework import serializers
from .models import User, UserRole, UserStatus


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'role',
            'status',
            'last_login',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    """Serializer for creating an operator account."""

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.OPERATOR)


class UserUpdateSerializer(serializers.Serializer):
    """Serializer for administrator edits of a user. Every field is optional."""

    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        required=False,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    status = serializers.ChoiceField(choices=UserStatus.choices, required=False)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
