from django.contrib import admin
from apps.meetings.models import (
    Meeting,
    MeetingCandidate,
    MeetingParticipant,
    MeetingVote,
    RouletteResult,
)


class MeetingCandidateInline(admin.TabularInline):
    model = MeetingCandidate
    extra = 0
    ordering = ['position']


class MeetingParticipantInline(admin.TabularInline):
    model = MeetingParticipant
    extra = 0
    readonly_fields = ['joined_at']


@admin.register(Meeting)
class MeetingAdmin(admin.ModelAdmin):
    """Admin interface for meetings."""

    list_display = ['id', 'host', 'date', 'time', 'week', 'type', 'status', 'selected_restaurant']
    list_filter = ['type', 'status', 'week']
    search_fields = ['host__nickname', 'selected_restaurant__name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [MeetingCandidateInline, MeetingParticipantInline]

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('host', 'selected_restaurant')


@admin.register(MeetingVote)
class MeetingVoteAdmin(admin.ModelAdmin):
    list_display = ['meeting', 'user', 'restaurant', 'updated_at']
    search_fields = ['user__nickname', 'restaurant__name']


@admin.register(RouletteResult)
class RouletteResultAdmin(admin.ModelAdmin):
    """Roulette results are an audit trail and cannot be edited."""

    list_display = ['meeting', 'selected_restaurant', 'random_value', 'spun_by', 'spun_at']
    readonly_fields = ['meeting', 'random_value', 'candidates', 'selected_restaurant', 'spun_by', 'spun_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
