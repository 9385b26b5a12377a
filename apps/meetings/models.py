from django.db import models
from django.db.models import Q
import uuid


class MeetingType(models.TextChoices):
    FIXED = 'fixed', 'Fixed restaurant'
    ROULETTE = 'roulette', 'Roulette'


class MeetingStatus(models.TextChoices):
    RECRUITING = 'recruiting', 'Recruiting'
    CLOSED = 'closed', 'Closed'
    COMPLETED = 'completed', 'Completed'


class ParticipantRole(models.TextChoices):
    HOST = 'host', 'Host'
    PARTICIPANT = 'participant', 'Participant'


class Meeting(models.Model):
    """A lunch meeting, either at a fixed restaurant or decided by roulette."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    host = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='hosted_meetings'
    )
    date = models.DateField()
    time = models.TimeField()
    week = models.PositiveSmallIntegerField(db_index=True)
    type = models.CharField(max_length=10, choices=MeetingType.choices)
    status = models.CharField(
        max_length=12,
        choices=MeetingStatus.choices,
        default=MeetingStatus.RECRUITING
    )

    # Fixed meetings: set on creation. Roulette meetings: set by the spin.
    selected_restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='selected_for_meetings'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'meetings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['week', 'status'], name='meetings_week_status_idx'),
            models.Index(fields=['host', 'status'], name='meetings_host_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['host'],
                condition=Q(status='recruiting'),
                name='one_recruiting_meeting_per_host',
            ),
        ]

    def __str__(self):
        return f"{self.host} @ {self.date} {self.time:%H:%M} ({self.type})"

    @property
    def is_roulette(self):
        return self.type == MeetingType.ROULETTE


class MeetingCandidate(models.Model):
    """A restaurant on a roulette meeting's ballot, in insertion order."""

    meeting = models.ForeignKey(Meeting, on_delete=models.CASCADE, related_name='candidates')
    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='meeting_candidacies'
    )
    position = models.PositiveSmallIntegerField()

    class Meta:
        db_table = 'meeting_candidates'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(
                fields=['meeting', 'restaurant'],
                name='unique_candidate_per_meeting',
            ),
            models.UniqueConstraint(
                fields=['meeting', 'position'],
                name='unique_candidate_position',
            ),
        ]

    def __str__(self):
        return f"{self.meeting_id} #{self.position}: {self.restaurant}"


class MeetingParticipant(models.Model):
    """Membership of a user in a meeting. The host has a row too."""

    meeting = models.ForeignKey(Meeting, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='meeting_participations'
    )
    role = models.CharField(
        max_length=12,
        choices=ParticipantRole.choices,
        default=ParticipantRole.PARTICIPANT
    )
    # Cleared when the meeting completes.
    is_active = models.BooleanField(default=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'meeting_participants'
        ordering = ['joined_at']
        constraints = [
            models.UniqueConstraint(
                fields=['meeting', 'user'],
                name='unique_participant_per_meeting',
            ),
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(is_active=True),
                name='one_active_participation_per_user',
            ),
        ]

    def __str__(self):
        return f"{self.user} in {self.meeting_id} ({self.role})"


class MeetingVote(models.Model):
    """A participant's current vote. Re-voting replaces the row's restaurant."""

    meeting = models.ForeignKey(Meeting, on_delete=models.CASCADE, related_name='votes')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='meeting_votes'
    )
    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.CASCADE,
        related_name='meeting_votes'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'meeting_votes'
        constraints = [
            models.UniqueConstraint(
                fields=['meeting', 'user'],
                name='one_vote_per_user_per_meeting',
            ),
        ]

    def __str__(self):
        return f"{self.user} -> {self.restaurant}"


class RouletteResult(models.Model):
    """
    Audit record of the single roulette draw of a meeting.

    `candidates` is a snapshot of the distribution used for the draw:
    a list of {restaurant_id, restaurant_name, vote_count, probability}.
    Rows are write-once.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    meeting = models.OneToOneField(
        Meeting,
        on_delete=models.CASCADE,
        related_name='roulette_result'
    )
    random_value = models.FloatField()
    candidates = models.JSONField()
    selected_restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='roulette_wins'
    )
    spun_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='roulette_spins'
    )
    spun_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'roulette_results'

    def __str__(self):
        return f"{self.meeting_id}: {self.selected_restaurant} (r={self.random_value:.4f})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Roulette results cannot be modified")
        super().save(*args, **kwargs)
