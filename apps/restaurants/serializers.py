from rest_framework import serializers
from .models import Restaurant, RestaurantPreference


class RestaurantSerializer(serializers.ModelSerializer):
    """Main serializer for restaurants."""

    class Meta:
        model = Restaurant
        fields = [
            'id',
            'name',
            'category',
            'description',
            'map_url',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class RestaurantMinimalSerializer(serializers.ModelSerializer):
    """Minimal restaurant info for nested serialization."""

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'category']
        read_only_fields = fields


class RestaurantCreateSerializer(serializers.Serializer):
    """Input serializer for adding a restaurant to the catalog."""

    name = serializers.CharField(max_length=100)
    category = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    map_url = serializers.URLField(required=False, allow_blank=True, default='')


class RestaurantPreferenceSerializer(serializers.ModelSerializer):
    """Serializer for a user's restaurant preference."""

    restaurant = RestaurantMinimalSerializer(read_only=True)

    class Meta:
        model = RestaurantPreference
        fields = ['id', 'restaurant', 'score', 'status', 'note', 'updated_at']
        read_only_fields = fields


class PreferenceUpdateSerializer(serializers.Serializer):
    """Input serializer for setting a preference."""

    score = serializers.FloatField(min_value=0.0, max_value=5.0, required=False, allow_null=True, default=None)
    status = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    note = serializers.CharField(required=False, allow_blank=True, default='')
