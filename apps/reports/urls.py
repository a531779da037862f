from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ReportViewSet, ReportExportView

router = DefaultRouter()
router.register(r'reports', ReportViewSet, basename='report')

urlpatterns = [
    # Before the router so "export" is not read as a report id
    path('reports/export/', ReportExportView.as_view(), name='report_export'),
    path('', include(router.urls)),
]
