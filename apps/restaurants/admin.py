from django.contrib import admin
from apps.restaurants.models import Restaurant, RestaurantPreference


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin interface for the restaurant catalog."""

    list_display = ['name', 'category', 'preference_count', 'created_at']
    list_filter = ['category']
    search_fields = ['name', 'category', 'description']
    readonly_fields = ['created_at']
    ordering = ['name']

    def preference_count(self, obj):
        """Show number of ratings."""
        return obj.preferences.count()
    preference_count.short_description = 'Ratings'


@admin.register(RestaurantPreference)
class RestaurantPreferenceAdmin(admin.ModelAdmin):
    """Admin interface for restaurant preferences."""

    list_display = ['user', 'restaurant', 'score', 'status', 'updated_at']
    list_filter = ['status']
    search_fields = ['user__nickname', 'restaurant__name']
    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'restaurant')
