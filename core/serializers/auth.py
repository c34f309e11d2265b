from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    username = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField()

    def validate(self, attrs):
        identifier = (attrs.get('email') or attrs.get('username') or '').strip()
        if not identifier:
            raise serializers.ValidationError('Email is required')
        attrs['identifier'] = identifier
        return attrs

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class ChangePasswordSerializer(serializers.Serializer):
    oldPassword = serializers.CharField()
    newPassword = serializers.CharField()

    def validate(self, attrs):
        user = self.context['request'].user
        if not user.check_password(attrs['oldPassword']):
            raise serializers.ValidationError({'oldPassword': ['Current password is incorrect']})
        if attrs['oldPassword'] == attrs['newPassword']:
            raise serializers.ValidationError({'newPassword': ['New password must differ from the current one']})
        try:
            validate_password(attrs['newPassword'], user=user)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'newPassword': list(e.messages)})
        return attrs


def user_payload(user) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'username': user.username,
        'name': user.get_full_name() or user.username,
        'role': user.role,
        'department': user.department,
    }
