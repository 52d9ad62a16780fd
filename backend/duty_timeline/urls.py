"""
URL configuration for the duty timeline API endpoints.

Provides URL routing for building daily log timelines, rendering
log sheet charts and hit-testing pointer positions on them.
"""

from django.urls import path

from .views import DutyTimelineViewSet, HealthCheckView, LogSheetChartViewSet

urlpatterns = [
    path("health/", HealthCheckView.as_view(), name="eld-health"),
    # Timeline endpoints
    path(
        "timelines/",
        DutyTimelineViewSet.as_view({"post": "build"}),
        name="eld-build-timelines",
    ),
    # Log sheet chart endpoints
    path(
        "log-sheets/render/",
        LogSheetChartViewSet.as_view({"post": "render_chart"}),
        name="eld-render-log-sheet",
    ),
    path(
        "log-sheets/hit-test/",
        LogSheetChartViewSet.as_view({"post": "hit_test"}),
        name="eld-log-sheet-hit-test",
    ),
]
