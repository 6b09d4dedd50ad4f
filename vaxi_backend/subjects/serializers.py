from django.utils import timezone
from rest_framework import serializers

from vaxi_backend.subjects.models import Subject


class SubjectReadSerializer(serializers.ModelSerializer):
    """Read-only serializer with all fields."""

    is_dependent = serializers.BooleanField(read_only=True)

    class Meta:
        model = Subject
        fields = [
            'id',
            'owner',
            'relation',
            'full_name',
            'date_of_birth',
            'gender',
            'country',
            'is_dependent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SubjectWriteSerializer(serializers.ModelSerializer):
    """Write serializer for create/update operations."""

    class Meta:
        model = Subject
        fields = [
            'relation',
            'full_name',
            'date_of_birth',
            'gender',
            'country',
        ]

    def validate_date_of_birth(self, value):
        if value is not None and value > timezone.localdate():
            raise serializers.ValidationError('date_of_birth cannot be in the future.')
        return value

    def validate_relation(self, value):
        value = (value or '').strip().lower()
        if not value:
            raise serializers.ValidationError('relation is required.')
        return value
