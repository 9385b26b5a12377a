from rest_framework import serializers

from .models import Meeting, MeetingParticipant, MeetingType, RouletteResult
from apps.accounts.models import User
from apps.restaurants.serializers import RestaurantMinimalSerializer
from apps.meetings.services import (
    FixedPlan,
    RoulettePlan,
    get_candidate_distribution,
    get_user_vote,
)


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    class Meta:
        model = User
        fields = ['id', 'nickname', 'profile_icon']
        read_only_fields = fields


class MeetingParticipantSerializer(serializers.ModelSerializer):
    """Serializer for meeting participants."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = MeetingParticipant
        fields = ['id', 'user', 'role', 'is_active', 'joined_at']
        read_only_fields = fields


class RouletteResultSerializer(serializers.ModelSerializer):
    """Stored outcome of a roulette draw."""

    selected_restaurant = RestaurantMinimalSerializer(read_only=True)
    spun_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = RouletteResult
        fields = [
            'id',
            'random_value',
            'candidates',
            'selected_restaurant',
            'spun_by',
            'spun_at',
        ]
        read_only_fields = fields


class MeetingListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for meeting lists."""

    host = UserMinimalSerializer(read_only=True)
    selected_restaurant = RestaurantMinimalSerializer(read_only=True)
    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Meeting
        fields = [
            'id',
            'host',
            'date',
            'time',
            'week',
            'type',
            'status',
            'selected_restaurant',
            'participant_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_participant_count(self, obj):
        count = getattr(obj, 'participant_count', None)
        return obj.participants.count() if count is None else count


class MeetingDetailSerializer(MeetingListSerializer):
    """
    Full meeting view.

    For roulette meetings `candidates` shows the live distribution while
    recruiting and the recorded snapshot once spun.
    """

    vote_count = serializers.SerializerMethodField()
    participants = MeetingParticipantSerializer(many=True, read_only=True)
    candidates = serializers.SerializerMethodField()
    roulette_result = serializers.SerializerMethodField()
    my_vote = serializers.SerializerMethodField()
    is_host = serializers.SerializerMethodField()
    is_participant = serializers.SerializerMethodField()

    class Meta(MeetingListSerializer.Meta):
        fields = MeetingListSerializer.Meta.fields + [
            'vote_count',
            'participants',
            'candidates',
            'roulette_result',
            'my_vote',
            'is_host',
            'is_participant',
            'updated_at',
        ]
        read_only_fields = fields

    def _user(self):
        request = self.context.get('request')
        return request.user if request else None

    def _result(self, obj):
        try:
            return obj.roulette_result
        except RouletteResult.DoesNotExist:
            return None

    def get_vote_count(self, obj):
        count = getattr(obj, 'vote_count', None)
        return obj.votes.count() if count is None else count

    def get_candidates(self, obj):
        if obj.type != MeetingType.ROULETTE:
            return []

        result = self._result(obj)
        if result is not None:
            return result.candidates

        return [
            {
                'restaurant_id': str(c.restaurant_id),
                'restaurant_name': c.name,
                'vote_count': c.vote_count,
                'probability': c.probability,
            }
            for c in get_candidate_distribution(meeting=obj)
        ]

    def get_roulette_result(self, obj):
        result = self._result(obj)
        return RouletteResultSerializer(result).data if result else None

    def get_my_vote(self, obj):
        user = self._user()
        if user is None:
            return None
        restaurant_id = get_user_vote(meeting=obj, user=user)
        return str(restaurant_id) if restaurant_id else None

    def get_is_host(self, obj):
        user = self._user()
        return bool(user and user.is_authenticated and obj.host_id == user.id)

    def get_is_participant(self, obj):
        user = self._user()
        if not (user and user.is_authenticated):
            return False
        return obj.participants.filter(user=user).exists()


class MeetingCreateSerializer(serializers.Serializer):
    """
    Input serializer for creating a meeting.

    Fixed meetings need `restaurant_id`, roulette meetings need
    `candidate_ids`. The validated data carries the matching plan.
    """

    date = serializers.DateField()
    time = serializers.TimeField()
    week = serializers.IntegerField(min_value=1, max_value=53, required=False)
    type = serializers.ChoiceField(choices=MeetingType.choices)
    restaurant_id = serializers.UUIDField(required=False)
    candidate_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
    )

    def validate(self, data):
        if data['type'] == MeetingType.FIXED:
            if 'candidate_ids' in data:
                raise serializers.ValidationError({'candidate_ids': 'Not allowed for fixed meetings'})
            if not data.get('restaurant_id'):
                raise serializers.ValidationError({'restaurant_id': 'Required for fixed meetings'})
            data['plan'] = FixedPlan(restaurant_id=data['restaurant_id'])
        else:
            if 'restaurant_id' in data:
                raise serializers.ValidationError({'restaurant_id': 'Not allowed for roulette meetings'})
            if 'candidate_ids' not in data:
                raise serializers.ValidationError({'candidate_ids': 'Required for roulette meetings'})
            data['plan'] = RoulettePlan(candidate_ids=tuple(data['candidate_ids']))
        return data


class VoteSerializer(serializers.Serializer):
    """Input serializer for voting."""
    restaurant_id = serializers.UUIDField()


class TransferHostSerializer(serializers.Serializer):
    """Input serializer for handing over the host role."""
    user_id = serializers.UUIDField()
