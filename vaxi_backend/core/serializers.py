"""Serializers for accounts and the JWT login flow."""

from django.contrib.auth import authenticate
from django.db.models import Q
from rest_framework import serializers
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from vaxi_backend.core.models import Role, User
from vaxi_backend.subjects.models import Subject


class RoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ['id', 'name', 'label']
        read_only_fields = fields


class AccountSerializer(serializers.ModelSerializer):
    """The signed-in account with its role and own subject profile."""

    role = RoleSerializer(read_only=True)
    self_subject_id = serializers.SerializerMethodField()
    subject_count = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'phone_number',
            'first_name',
            'last_name',
            'role',
            'self_subject_id',
            'subject_count',
        ]
        read_only_fields = fields

    def _subjects(self, obj):
        return Subject.objects.filter(owner=obj, is_active=True)

    def get_self_subject_id(self, obj):
        subject = self._subjects(obj).filter(relation=Subject.RELATION_SELF).order_by('id').first()
        return subject.id if subject else None

    def get_subject_count(self, obj):
        return self._subjects(obj).count()


class LoginSerializer(serializers.Serializer):
    """Credentials check; ``login`` may be the username, email or phone number."""

    login = serializers.CharField(required=False)
    username = serializers.CharField(required=False)
    password = serializers.CharField(required=True, write_only=True)

    def validate(self, attrs):
        identifier = (attrs.get('login') or attrs.get('username') or '').strip()
        if not identifier:
            raise serializers.ValidationError({'login': 'This field is required.'})

        account = (
            User.objects.filter(Q(username=identifier) | Q(email__iexact=identifier) | Q(phone_number=identifier))
            .order_by('id')
            .first()
        )
        username = account.username if account else identifier

        user = authenticate(username=username, password=attrs.get('password'))
        if user is None:
            if account is not None and not account.is_active:
                raise serializers.ValidationError('User account is disabled.')
            raise serializers.ValidationError('Invalid credentials.')

        attrs['user'] = user
        return attrs


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=True)

    def validate_refresh(self, value):
        try:
            RefreshToken(value)
        except TokenError as e:
            raise serializers.ValidationError(f'Invalid or expired refresh token: {e}')
        return value
