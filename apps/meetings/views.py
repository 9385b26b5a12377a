from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    MeetingListSerializer,
    MeetingDetailSerializer,
    MeetingCreateSerializer,
    MeetingParticipantSerializer,
    RouletteResultSerializer,
    VoteSerializer,
    TransferHostSerializer,
)

from apps.meetings.services import (
    create_meeting,
    get_meeting_by_id,
    dissolve_meeting,
    close_recruitment,
    complete_meeting,
    transfer_host,
    list_week_meetings,
    get_user_meetings,
    get_meeting_history,
    join_meeting,
    leave_meeting,
    get_meeting_participants,
    cast_vote,
    spin_roulette,
    can_create_meeting,
    load_participation_context,
    # Exceptions
    MeetingsServiceError,
    NotAuthenticatedError,
    NotAuthorizedError,
    AlreadyParticipatingError,
    MeetingNotRecruitingError,
    NotAParticipantError,
    NotACandidateError,
    InvalidCandidateSetError,
    NoCandidatesError,
    AlreadySpunError,
    ServerError,
    MeetingNotFoundError,
    CannotCreateMeetingError,
    HostCannotLeaveError,
    NotARouletteMeetingError,
    InvalidStatusTransitionError,
    RestaurantNotFoundError,
)
from apps.meetings.services.exceptions import translate_storage_errors


ERROR_STATUS_CODES = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotAParticipantError: status.HTTP_403_FORBIDDEN,
    MeetingNotFoundError: status.HTTP_404_NOT_FOUND,
    RestaurantNotFoundError: status.HTTP_404_NOT_FOUND,
    NotACandidateError: status.HTTP_400_BAD_REQUEST,
    InvalidCandidateSetError: status.HTTP_400_BAD_REQUEST,
    HostCannotLeaveError: status.HTTP_400_BAD_REQUEST,
    AlreadyParticipatingError: status.HTTP_409_CONFLICT,
    MeetingNotRecruitingError: status.HTTP_409_CONFLICT,
    NoCandidatesError: status.HTTP_409_CONFLICT,
    AlreadySpunError: status.HTTP_409_CONFLICT,
    CannotCreateMeetingError: status.HTTP_409_CONFLICT,
    NotARouletteMeetingError: status.HTTP_409_CONFLICT,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
    ServerError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_response(error):
    """Convert a meetings service error to an HTTP response."""
    status_code = ERROR_STATUS_CODES.get(type(error), status.HTTP_400_BAD_REQUEST)
    return Response({'error': str(error), 'code': error.code}, status=status_code)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()


class MeetingPagination(PageNumberPagination):
    """Custom pagination for meetings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class MeetingViewSet(viewsets.GenericViewSet):
    """
    ViewSet for lunch meetings.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Recruiting meetings of a week (?week=N, default current week)
    create: Create a fixed or roulette meeting
    retrieve: Meeting details with live roulette odds
    destroy: Dissolve a meeting (host only)
    """

    serializer_class = MeetingDetailSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = MeetingPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ('list', 'mine', 'history'):
            return MeetingListSerializer
        elif self.action == 'create':
            return MeetingCreateSerializer
        return MeetingDetailSerializer

    @translate_storage_errors
    def _detail_data(self, meeting_id):
        meeting = get_meeting_by_id(meeting_id=meeting_id)
        return MeetingDetailSerializer(meeting, context={'request': self.request}).data

    def _detail(self, meeting_id, status_code=status.HTTP_200_OK):
        try:
            data = self._detail_data(meeting_id)
        except MeetingsServiceError as e:
            return _error_response(e)
        return Response(data, status=status_code)

    @translate_storage_errors
    def _page_data(self, queryset):
        page = self.paginate_queryset(queryset)
        return MeetingListSerializer(page, many=True).data

    def _paginated(self, queryset):
        """Paginate a lazy meeting queryset; storage errors surface here."""
        try:
            data = self._page_data(queryset)
        except ServerError as e:
            return _error_response(e)
        return self.get_paginated_response(data)

    @extend_schema(parameters=[OpenApiParameter('week', int, description='ISO week number')])
    def list(self, request):
        """Recruiting meetings of a week, newest first."""
        week = request.query_params.get('week')
        if week is not None:
            try:
                week = int(week)
            except ValueError:
                return Response({'error': 'week must be an integer'}, status=status.HTTP_400_BAD_REQUEST)

        return self._paginated(list_week_meetings(week=week))

    @extend_schema(
        request=MeetingCreateSerializer,
        responses={201: MeetingDetailSerializer, 409: ErrorResponseSerializer},
    )
    def create(self, request):
        """Create a meeting hosted by the current user."""
        serializer = MeetingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            meeting = create_meeting(
                host=request.user,
                date=data['date'],
                time=data['time'],
                plan=data['plan'],
                week=data.get('week'),
            )
        except MeetingsServiceError as e:
            return _error_response(e)

        return self._detail(meeting.id, status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get meeting details."""
        return self._detail(pk)

    @extend_schema(responses={204: None, 403: ErrorResponseSerializer})
    def destroy(self, request, pk=None):
        """Dissolve a meeting."""
        try:
            dissolve_meeting(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={201: MeetingParticipantSerializer, 409: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join a recruiting meeting."""
        try:
            participant = join_meeting(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)

        output_serializer = MeetingParticipantSerializer(participant)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None, 400: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a meeting."""
        try:
            leave_meeting(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def participants(self, request, pk=None):
        """List participants in join order."""
        try:
            participants = get_meeting_participants(meeting_id=pk)
        except MeetingsServiceError as e:
            return _error_response(e)
        return Response(MeetingParticipantSerializer(participants, many=True).data)

    @extend_schema(request=VoteSerializer, responses={200: MeetingDetailSerializer})
    @action(detail=True, methods=['post'])
    def vote(self, request, pk=None):
        """Vote for a candidate restaurant."""
        serializer = VoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            cast_vote(
                meeting_id=pk,
                user=request.user,
                restaurant_id=serializer.validated_data['restaurant_id'],
            )
        except MeetingsServiceError as e:
            return _error_response(e)

        return self._detail(pk)

    @extend_schema(request=None, responses={201: RouletteResultSerializer, 409: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def spin(self, request, pk=None):
        """Spin the roulette. Host only, once per meeting."""
        try:
            result = spin_roulette(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)

        return Response(RouletteResultSerializer(result).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: MeetingDetailSerializer})
    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        """Stop recruiting for a fixed meeting."""
        try:
            close_recruitment(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)
        return self._detail(pk)

    @extend_schema(request=None, responses={200: MeetingDetailSerializer})
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Mark a closed meeting as completed."""
        try:
            complete_meeting(meeting_id=pk, user=request.user)
        except MeetingsServiceError as e:
            return _error_response(e)
        return self._detail(pk)

    @extend_schema(request=TransferHostSerializer, responses={200: MeetingDetailSerializer})
    @action(detail=True, methods=['post'])
    def transfer_host(self, request, pk=None):
        """Hand the host role to another participant."""
        serializer = TransferHostSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            transfer_host(
                meeting_id=pk,
                user=request.user,
                new_host_id=serializer.validated_data['user_id'],
            )
        except MeetingsServiceError as e:
            return _error_response(e)
        return self._detail(pk)

    @action(detail=False, methods=['get'])
    def mine(self, request):
        """Meetings the current user hosts or takes part in."""
        try:
            meetings = get_user_meetings(user=request.user)
        except ServerError as e:
            return _error_response(e)
        return Response({
            'hosted': MeetingListSerializer(meetings['hosted'], many=True).data,
            'participating': MeetingListSerializer(meetings['participating'], many=True).data,
        })

    @extend_schema(parameters=[
        OpenApiParameter('role', str, enum=['host', 'participant']),
        OpenApiParameter('status', str, enum=['closed', 'completed']),
    ])
    @action(detail=False, methods=['get'])
    def history(self, request):
        """Past meetings of the current user, newest first."""
        meetings = get_meeting_history(
            user=request.user,
            role=request.query_params.get('role'),
            status=request.query_params.get('status'),
        )
        return self._paginated(meetings)

    @action(detail=False, methods=['get'])
    def can_create(self, request):
        """Whether the current user may create a meeting right now."""
        ctx = load_participation_context(request.user)
        return Response({'can_create': can_create_meeting(ctx)})
