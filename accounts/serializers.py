"""Serializers for the accounts app."""

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public view of a user (never includes the password hash)."""

    class Meta:
        model = User
        fields = ['id', 'email', 'name']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    """Check ``{email, password}`` and expose the matching user as ``user``."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            email=attrs['email'],
            password=attrs['password'],
        )
        if user is None or not user.is_active:
            raise AuthenticationFailed('Invalid email or password')
        attrs['user'] = user
        return attrs
