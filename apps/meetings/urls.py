from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'meetings'

router = DefaultRouter()
router.register(r'', views.MeetingViewSet, basename='meeting')

urlpatterns = [
    # GET    /api/meetings/?week=N                  - Recruiting meetings of a week
    # POST   /api/meetings/                         - Create meeting
    # GET    /api/meetings/{id}/                    - Meeting details
    # DELETE /api/meetings/{id}/                    - Dissolve (host)
    # POST   /api/meetings/{id}/join/               - Join
    # POST   /api/meetings/{id}/leave/              - Leave
    # GET    /api/meetings/{id}/participants/       - Participants
    # POST   /api/meetings/{id}/vote/               - Vote for a candidate
    # POST   /api/meetings/{id}/spin/               - Spin the roulette (host)
    # POST   /api/meetings/{id}/close/              - Close recruitment (host, fixed)
    # POST   /api/meetings/{id}/complete/           - Mark completed (host)
    # POST   /api/meetings/{id}/transfer_host/      - Hand over host role
    # GET    /api/meetings/mine/                    - My current meetings
    # GET    /api/meetings/history/                 - My past meetings
    # GET    /api/meetings/can_create/              - May I host now?
    path('', include(router.urls)),
]
