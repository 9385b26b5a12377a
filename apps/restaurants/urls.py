from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'restaurants'

router = DefaultRouter()
router.register(r'', views.RestaurantViewSet, basename='restaurant')

urlpatterns = [
    # GET    /api/restaurants/                      - Search catalog
    # POST   /api/restaurants/                      - Add restaurant
    # GET    /api/restaurants/{id}/                 - Restaurant details
    # GET    /api/restaurants/categories/           - Known categories
    # GET    /api/restaurants/preferences/          - My preferences
    # PUT    /api/restaurants/{id}/preference/      - Rate restaurant
    # DELETE /api/restaurants/{id}/preference/      - Clear rating
    path('', include(router.urls)),
]
