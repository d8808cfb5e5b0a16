"""Serializers for the suppliers app."""

from rest_framework import serializers

from .models import Supplier


class SupplierSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Supplier
        fields = ['id', 'name', 'createdAt', 'updatedAt']
        # Duplicate names are reported as 409 by the service, not as a 400 here.
        extra_kwargs = {'name': {'validators': []}}
