"""Customer DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views).  They
render responses and describe request bodies for the OpenAPI schema;
request validation itself lives in ``validators.py`` so that every
violation is reported in one response.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Public shape of a customer: never exposes the password hash."""

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "status"]
        read_only_fields = fields


class CustomerProfileSerializer(CustomerSerializer):
    """The authenticated customer's own record, roles included."""

    class Meta(CustomerSerializer.Meta):
        fields = ["id", "name", "email", "status", "roles"]
        read_only_fields = fields


class CustomerRequestSerializer(serializers.Serializer):
    """Request body of create/update (schema only)."""

    name = serializers.CharField()
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class TokenSerializer(serializers.Serializer):
    access = serializers.CharField()
