from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import MarketViewSet, DeviceViewSet

router = DefaultRouter()
router.register(r'markets', MarketViewSet, basename='market')
router.register(r'devices', DeviceViewSet, basename='device')

urlpatterns = [
    path('', include(router.urls)),
]
