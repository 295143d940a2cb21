"""Serializers for request payloads and domain models in API responses.

Request serializers only check shape and type. Blank values, unknown
categories and time formats are judged by the services.
"""

from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    email = serializers.CharField(allow_blank=True, trim_whitespace=False)
    password = serializers.CharField(allow_blank=True, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(allow_blank=True, trim_whitespace=False)
    password = serializers.CharField(allow_blank=True, trim_whitespace=False)


class AdminStatusSerializer(serializers.Serializer):
    is_admin = serializers.BooleanField()


class EventCreateSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    category = serializers.CharField(allow_blank=True)
    scheduled_at = serializers.CharField(allow_blank=True)
    location = serializers.CharField(allow_blank=True, trim_whitespace=False)
    capacity = serializers.IntegerField()
    description = serializers.CharField(allow_blank=True, trim_whitespace=False)


class UserSerializer(serializers.Serializer):
    """Serializer for the User domain model. The password hash is never exposed."""

    id = serializers.IntegerField(source="id.value")
    name = serializers.CharField()
    email = serializers.CharField()
    is_admin = serializers.BooleanField()


class CategorySerializer(serializers.Serializer):
    """Serializer for Category members."""

    name = serializers.CharField()
    label = serializers.CharField()


class EventDetailSerializer(serializers.Serializer):
    """Serializer for EventDetail: an event plus its organizer's display name."""

    id = serializers.IntegerField(source="event.id.value")
    name = serializers.CharField(source="event.name")
    category = serializers.CharField(source="event.category.name")
    category_label = serializers.CharField(source="event.category.label")
    scheduled_at = serializers.DateTimeField(source="event.scheduled_at")
    location = serializers.CharField(source="event.location")
    capacity = serializers.IntegerField(source="event.capacity.value")
    organizer_id = serializers.IntegerField(source="event.organizer_id.value")
    organizer_name = serializers.CharField()
    description = serializers.CharField(source="event.description")
