from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


class Restaurant(models.Model):
    """A place the club can eat at. Reference data shared by all meetings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(max_length=30, blank=True, db_index=True)
    description = models.TextField(blank=True)
    map_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'restaurants'
        ordering = ['name']

    def __str__(self):
        return self.name


class RestaurantPreference(models.Model):
    """A user's personal rating of a restaurant."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='restaurant_preferences')
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name='preferences')
    score = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0), MaxValueValidator(5.0)],
    )
    status = models.CharField(max_length=20, blank=True)
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurant_preferences'
        unique_together = [['user', 'restaurant']]
        indexes = [
            models.Index(fields=['user', 'score'], name='pref_user_score_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.restaurant} ({self.score})"
