from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'playbacks', views.PlaybackViewSet, basename='playback')
router.register(r'audiences', views.AudienceViewSet, basename='audience')

urlpatterns = [
    path('', include(router.urls)),
]

function_urlpatterns = [
    path('insert-playback/', views.InsertPlaybackView.as_view(), name='insert_playback'),
]
