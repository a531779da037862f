"""
URL configuration for the Canal Mercado backend.

Read API under /api/v1/, the playback insertion function under
/functions/v1/ and the OpenAPI schema under /api/schema/.
"""

from django.contrib import admin
from django.urls import path
from django.urls import include
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

from apps.events.urls import function_urlpatterns


def home_view(request):
    return JsonResponse({
        "message": "Canal Mercado Backend API",
        "status": "running",
        "endpoints": {
            "admin": "/admin/",
            "api": "/api/v1/",
            "functions": "/functions/v1/insert-playback/",
            "docs": "/api/docs/",
            "schema": "/api/schema/"
        }
    })


urlpatterns = [
    path("", home_view, name="home"),
    path("admin/", admin.site.urls),
    path("api/v1/auth/", include("apps.authentication.urls")),
    path("api/v1/analytics/", include("apps.analytics.urls")),
    path("api/v1/", include("apps.markets.urls")),
    path("api/v1/", include("apps.campaigns.urls")),
    path("api/v1/", include("apps.events.urls")),
    path("api/v1/", include("apps.reports.urls")),
    path("functions/v1/", include(function_urlpatterns)),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
