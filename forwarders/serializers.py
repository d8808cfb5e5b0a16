"""Serializers for the forwarders app."""

from rest_framework import serializers

from .models import Forwarder


class ForwarderSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Forwarder
        fields = ['id', 'name', 'createdAt', 'updatedAt']
        extra_kwargs = {'name': {'validators': []}}
